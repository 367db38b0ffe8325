"""
FastAPI backend serving the strategy analysis endpoint.

The dashboard's AnalysisClient posts to /api/analyze; the Gemini key never
leaves this process.
"""
from functools import lru_cache

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from hotelintel.config import ConfigManager, get_settings
from hotelintel.analytics.currency import CurrencyConverter
from hotelintel.gemini.schema import AnalysisRequest
from hotelintel.gemini.strategist import GeminiStrategist
from hotelintel.utils.logger import get_logger
from hotelintel.utils.exceptions import ConfigError, HotelIntelError

logger = get_logger()


@lru_cache(maxsize=1)
def get_strategist() -> GeminiStrategist:
    """Build the strategist once from settings and the user config."""
    settings = get_settings()
    config = ConfigManager().load_config()
    if not config or not config.gemini_api_key:
        raise ConfigError("Gemini API key is not configured")

    return GeminiStrategist(
        api_key=config.gemini_api_key,
        model_name=settings.llm_model_name,
        max_retries=settings.llm_max_retries,
        initial_delay=settings.llm_initial_delay_seconds,
        backoff_factor=settings.llm_backoff_factor,
        converter=CurrencyConverter(settings.usd_to_inr, settings.inr_per_gbp)
    )


def create_app() -> FastAPI:
    app = FastAPI(title="HotelIntel Strategy API")

    @app.exception_handler(HotelIntelError)
    async def hotelintel_error_handler(request, exc: HotelIntelError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.post("/api/analyze")
    def analyze(body: AnalysisRequest, strategist: GeminiStrategist = Depends(get_strategist)):
        logger.info(
            f"Analyze request: {len(body.transactions)} transactions, location={body.location}"
        )
        analysis = strategist.analyze(body)
        return analysis.model_dump(by_alias=True, exclude_none=True)

    return app


app = create_app()
