import logging

from fastapi import FastAPI

from api.dependencies import config
from api.routers import ops, plans, tasks

# Logging configuration
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Study Planner")

app.include_router(ops.router)
app.include_router(tasks.router)
app.include_router(plans.router)

logger.info(f"Study planner API ready (provider: {config.llm_provider})")
