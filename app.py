"""
FPL Wrapped API

FastAPI wrapper around the season summary pipeline.
"""

import logging
import os

from fastapi import FastAPI, File, UploadFile, HTTPException
from fastapi.responses import JSONResponse

from fpl_wrapped import __version__
from fpl_wrapped.config import PipelineConfig
from fpl_wrapped.parsers.season_loader import SeasonLoader
from fpl_wrapped.scoring.summary_builder import SeasonSummaryBuilder
from fpl_wrapped.utils.export_validator import ExportValidator

logging.basicConfig(
    level=os.environ.get("FPL_WRAPPED_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="FPL Wrapped",
    description="Analyze an FPL season export: transfers, captaincy, bench, chips and manager persona",
    version=__version__,
)


@app.get("/")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "fpl-wrapped",
        "version": __version__,
    }


@app.get("/health")
async def health():
    """Alias for health check."""
    return await health_check()


@app.post("/summary")
async def season_summary(file: UploadFile = File(...)):
    """
    Build the season summary for an uploaded season export.

    Returns the SeasonSummary as JSON. Skipped transfer rows are reported
    in the X-Loader-Warnings header.
    """
    validator = ExportValidator()
    if not file.filename or not validator.validate_extension(file.filename):
        raise HTTPException(status_code=400, detail="File must be a JSON season export")

    content = await file.read()

    loader = SeasonLoader()
    try:
        context = loader.loads(content)
        config = PipelineConfig.from_env()
        summary = SeasonSummaryBuilder(config).build(context)
    except ValueError as e:
        logger.warning("Rejected season export %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        "Manager %s: %s (%d gameweeks)",
        summary.manager_id,
        summary.persona.name,
        summary.gameweeks_analyzed,
    )
    return JSONResponse(
        content=summary.model_dump(mode='json'),
        headers={"X-Loader-Warnings": str(len(loader.warnings))},
    )


@app.post("/analyze")
async def analyze_export(file: UploadFile = File(...)):
    """Alias for /summary endpoint."""
    return await season_summary(file)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", 8000)))
