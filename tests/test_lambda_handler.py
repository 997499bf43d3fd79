# ---------- TESTS FOR LAMBDA HANDLER ----------

from mangum import Mangum

import lambda_handler
from termscloud.api.server import app


def test_handler_wraps_app():
    """Test that the Lambda entry point serves the FastAPI app."""
    assert isinstance(lambda_handler.handler, Mangum)
    assert lambda_handler.handler.app is app
