"""
celery_worker.py
----------------
Defines the Celery app and the step execution task. Dispatches each step to the
plugin registered under its name. Steps are executed once; failures propagate
to the caller through the result backend.
"""
import logging

from celery import Celery
from celery.signals import worker_init

from .config import BROKER_URL, RESULT_BACKEND, configure_logging
from .registry import run_operation

logger = logging.getLogger(__name__)

app = Celery("restbridge", broker=BROKER_URL, backend=RESULT_BACKEND)


@app.task(name="restbridge.run_step")
def run_step(plugin_name, operation, payload):
    logger.info("Running %s.%s", plugin_name, operation)
    try:
        return run_operation(plugin_name, operation, payload)
    except Exception:
        logger.exception("Step %s.%s failed", plugin_name, operation)
        raise


# --- Signals ---

@worker_init.connect
def worker_ready(sender=None, **kwargs):
    configure_logging()
    logger.info("Worker initialized.")
