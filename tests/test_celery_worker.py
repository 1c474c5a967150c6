import pytest

from restbridge.celery_worker import app, run_step
from restbridge.errors import ConfigurationError


def test_task_is_registered_by_name():
    assert "restbridge.run_step" in app.tasks


def test_run_step_executes_plugin(mock_request):
    payload = {
        "datasourceConfiguration": {"urlBase": "https://api.example.com"},
        "actionConfiguration": {"httpMethod": "GET", "urlPath": "/health"},
    }

    result = run_step("restapi", "execute", payload)

    assert result["output"] == {"ok": True}
    assert mock_request.call_args[0][:2] == ("GET", "https://api.example.com/health")


def test_run_step_propagates_errors(mock_request):
    with pytest.raises(ConfigurationError, match="URL is not valid"):
        run_step("restapi", "execute", {"actionConfiguration": {"httpMethod": "GET"}})
    mock_request.assert_not_called()
