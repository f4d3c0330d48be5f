"""
Prepress Report - structured digest of prepress workflow logs
Deterministic, fail-soft API turning raw prepress logs into a canonical report
"""

import logging
import os
from typing import Any, List, Optional

from fastapi import Body, FastAPI, Header, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from common.config_store import PromptConfigStore
from preflight.help_links import resolve_help_links
from preflight.language import resolve_language
from preflight.models import HelpLink, ReportStats
from preflight.pipeline import ReportPipeline
from preflight.presentation import format_report_summary

# Configure logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='[%(levelname)s] %(message)s'
)
logger = logging.getLogger(__name__)

# Global configuration with environment variable support
PROMPT_CONFIG_PATH = os.environ.get("PROMPT_CONFIG_PATH")
PORT = int(os.environ.get("PORT", "8080"))

# Application
app = FastAPI(title="Prepress Report", version="1.0.0")

report_pipeline = ReportPipeline()
prompt_config = PromptConfigStore(PROMPT_CONFIG_PATH)
logger.info(f"Prompt config: {prompt_config.config_path}")


class SummaryResponse(BaseModel):
    language: str
    summary: str
    stats: ReportStats


class HelpLinksResponse(BaseModel):
    language: str
    helpLinks: List[HelpLink]


def _build_report(raw_log: Any):
    """Run the pipeline, mapping unexpected failures to HTTP 500."""
    try:
        return report_pipeline.run(raw_log)
    except Exception as e:
        logger.error(f"Unexpected error while building report: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to build report"
        )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {
        "message": "Prepress Report API is running",
        "docs": "/docs",
        "health": "/health"
    }


@app.post("/report")
def build_report(raw_log: Any = Body(...)):
    """
    Build the structured report for a raw prepress log.

    Args:
        raw_log: Raw log as JSON, or a JSON string of it

    Returns:
        Report with camelCase keys
    """
    report = _build_report(raw_log)
    return JSONResponse(content=report.to_json_dict())


@app.post("/report/summary", response_model=SummaryResponse)
def build_summary(
    raw_log: Any = Body(...),
    lang: Optional[str] = Query(None),
    accept_language: Optional[str] = Header(None),
):
    """
    Plain-text digest of a raw prepress log.

    The language comes from `lang`, else from the Accept-Language header.
    Section titles and the closing text come from the prompt configuration.
    """
    language = resolve_language(lang, accept_language)
    report = _build_report(raw_log)

    summary = format_report_summary(
        report,
        lang=language,
        section_titles=prompt_config.section_titles(),
        cta_text=prompt_config.cta_text(),
    )
    return SummaryResponse(language=language, summary=summary, stats=report.stats)


@app.post("/report/help-links")
def build_help_links(
    raw_log: Any = Body(...),
    lang: Optional[str] = Query(None),
    accept_language: Optional[str] = Header(None),
):
    """Help articles matching the issues and fixes found in a raw prepress log."""
    language = resolve_language(lang, accept_language)
    report = _build_report(raw_log)

    links = resolve_help_links(report, language, prompt_config.help_base_url())
    response = HelpLinksResponse(language=language, helpLinks=links)
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
