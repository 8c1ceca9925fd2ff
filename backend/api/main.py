from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List
import logging
import re

from api.config import settings
from scrapers.manager import ScraperManager

# Setup logging directory
settings.log_dir.mkdir(exist_ok=True)


# Custom formatter to strip ANSI color codes from file logs
class ColorStripFormatter(logging.Formatter):
    """Formatter that strips ANSI color codes from log messages."""
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    def format(self, record):
        message = super().format(record)
        return self.ansi_escape.sub('', message)

# Setup logging with color support for console, stripped for file
file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
file_handler.setFormatter(ColorStripFormatter(settings.log_format))

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(settings.log_format))

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    handlers=[file_handler, console_handler],
    force=True  # Override any existing configuration
)

# Scraper loggers get their own handlers so each line appears once
scraper_logger = logging.getLogger('scraper')
scraper_logger.propagate = False
# Only add handlers if not already present (prevents duplicates on module reload)
if not scraper_logger.handlers:
    scraper_logger.addHandler(file_handler)
    scraper_logger.addHandler(console_handler)
scraper_logger.setLevel(getattr(logging, settings.log_level.upper()))

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info("Immo-Search Backend Starting Up")
    logger.info("=" * 60)
    logger.info(f"Log file: {settings.log_file}")
    logger.info(f"CORS origins: {settings.cors_origins}")
    logger.info(f"Per-source timeout: {settings.scraper_timeout}s")
    logger.info("Backend ready to accept requests")

    yield  # Application runs here

    logger.info("Immo-Search Backend Shutting Down")


app = FastAPI(
    title="Immo-Search API",
    version="1.0.0",
    debug=settings.api_debug,
    lifespan=lifespan
)

# Note: allow_credentials must be False when allow_origins is ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty response for favicon requests"""
    return Response(status_code=204)


# Pydantic models for API responses
class ListingResponse(BaseModel):
    site: str
    images: List[str] = []
    main_image: str = ""
    link_text: str = ""
    link_title: str = ""
    link_href: str = ""
    link: str = ""
    location: str = ""
    location_details: str = ""
    location_map: str = ""
    price: str = ""
    info_beds: str = ""
    info_bath: str = ""
    info_habitable: str = ""
    info_land: str = ""
    description: str = ""
    ref: str = ""

    class Config:
        alias_generator = to_camel  # mainImage, linkText, infoBeds, ...
        populate_by_name = True
        from_attributes = True


def get_scraper_manager() -> ScraperManager:
    """A fresh manager per request, nothing is shared between requests."""
    return ScraperManager(
        timeout=settings.scraper_timeout,
        max_concurrency=settings.scraper_max_concurrency,
    )


# API Endpoints

@app.get("/")
async def root():
    return {"message": "Immo-Search API", "version": "1.0.0"}


@app.get("/api/scrapers")
async def list_scrapers(manager: ScraperManager = Depends(get_scraper_manager)):
    """List all configured sources and their implementation status"""
    return {
        "scrapers": manager.list_scrapers(),
        "implemented": manager.get_implemented_scrapers()
    }


@app.get("/api/scrape", response_model=List[ListingResponse])
async def scrape_all_sources(manager: ScraperManager = Depends(get_scraper_manager)):
    """Scrape every enabled source and return the combined listings"""
    try:
        logger.info("Scraping started...")
        listings = await manager.aggregate()
        logger.info(f"Scraping success: {len(listings)} listings")
        return [listing.to_dict() for listing in listings]
    except Exception as e:
        logger.exception(f"Error in /api/scrape: {e}")
        return JSONResponse(
            status_code=500,
            content=[{"error": "Error scraping data", "details": str(e)}],
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        access_log=True,
        log_config=None,  # Keep the handlers configured above
        timeout_keep_alive=5,
        timeout_graceful_shutdown=5.0,
    )
