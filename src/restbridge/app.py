"""
app.py
--------
FastAPI application exposing registered integration plugins over HTTP:
execute a step (inline or through Celery), render it as cURL, list its dynamic
fields, and run the connection-test and metadata hooks.
"""
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import configure_logging
from .errors import ConfigurationError, IntegrationError, RequestExecutionError
from .registry import PLUGIN_REGISTRY, plugin_names, run_operation

configure_logging()

app = FastAPI(title="restbridge")


class StepPayload(BaseModel):
    context: Optional[Dict[str, Any]] = None
    datasourceConfiguration: Optional[Dict[str, Any]] = None
    actionConfiguration: Optional[Dict[str, Any]] = None


def _run(name: str, operation: str, payload: StepPayload = None):
    if name not in PLUGIN_REGISTRY:
        raise HTTPException(status_code=404, detail="Plugin not found")
    try:
        return run_operation(name, operation, payload.model_dump() if payload else None)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RequestExecutionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except IntegrationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/plugins")
def list_plugins():
    return {"plugins": plugin_names()}


@app.post("/plugins/{name}/execute")
def execute_step(name: str, payload: StepPayload):
    return _run(name, "execute", payload)


@app.post("/plugins/{name}/execute/async")
def enqueue_step(name: str, payload: StepPayload):
    from .celery_worker import run_step

    if name not in PLUGIN_REGISTRY:
        raise HTTPException(status_code=404, detail="Plugin not found")
    async_result = run_step.apply_async(args=[name, "execute", payload.model_dump()])
    return {"celery_id": async_result.id}


@app.post("/plugins/{name}/request")
def describe_step(name: str, payload: StepPayload):
    return {"request": _run(name, "describe_request", payload)}


@app.get("/plugins/{name}/properties")
def step_properties(name: str):
    return {
        "dynamic": _run(name, "dynamic_fields"),
        "escaped": _run(name, "escaped_fields"),
    }


@app.post("/plugins/{name}/metadata")
def datasource_metadata(name: str, payload: StepPayload):
    return _run(name, "introspect_schema", payload)


@app.post("/plugins/{name}/test")
def test_datasource(name: str, payload: StepPayload):
    return _run(name, "check_connection", payload)
