"""Script to generate the OpenAPI json file."""

import os
from pathlib import Path

import orjson
from fastapi.openapi.utils import get_openapi


os.environ.setdefault("APP_ENV", "development")

from microblog.main import app  # noqa: E402


openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    routes=app.routes,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
output.write_bytes(orjson.dumps(openapi_schema, option=orjson.OPT_INDENT_2))
