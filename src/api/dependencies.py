from pathlib import Path

from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient
from scheduling.scheduler import Scheduler
from storage.plan_store import PlanStore
from storage.task_store import TaskStore
from study_planner.config import AppConfig

# Configuration
config = AppConfig.from_env()

llm_client = LLMClient(config=config)
task_extractor = TaskExtractor(llm_client=llm_client)
scheduler = Scheduler(llm_client=llm_client)
task_store = TaskStore(path=str(Path(config.data_dir) / "tasks.json"))
plan_store = PlanStore(path=str(Path(config.data_dir) / "plans.json"))


def get_config() -> AppConfig:
    return config


def get_task_extractor() -> TaskExtractor:
    return task_extractor


def get_scheduler() -> Scheduler:
    return scheduler


def get_task_store() -> TaskStore:
    return task_store


def get_plan_store() -> PlanStore:
    return plan_store
