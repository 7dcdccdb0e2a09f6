"""
AWS Lambda handler for the FastAPI application using Mangum.
Exposes the job-board AI writing API behind API Gateway.
"""

import logging
from mangum import Mangum
from app.main import app
from app.config import get_settings
from app.services.ai_response_db import ensure_table

logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Lifespan is off under Lambda, so the cache table is prepared on cold start
if get_settings().database_url:
    try:
        ensure_table()
    except Exception:
        logger.exception("Could not prepare ai_responses table")

handler = Mangum(app, lifespan="off")


def lambda_handler(event, context):
    """
    AWS Lambda entry point.

    Parameters
    ----------
    event : dict
        API Gateway event object containing the HTTP request details
    context : LambdaContext
        AWS Lambda context object with runtime information

    Returns
    -------
    dict
        API Gateway-compatible response with statusCode, headers, and body
    """
    logger.info(
        "Received event  request_id=%s  path=%s",
        event.get("requestContext", {}).get("requestId", "unknown"),
        event.get("rawPath") or event.get("path"),
    )
    return handler(event, context)
