"""FastAPI server exposing the upload, analysis and combination endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from style_app.app import StyleMatcherApp
from style_app.logging_config import configure_logging
from logic.validation import ValidationFailure
from memory.session_store import UnknownSessionError

TOO_LARGE = "Upload exceeds the maximum request size"


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``max_bytes`` before they are parsed.

    A declared ``Content-Length`` over the limit is refused up front; chunked
    bodies are counted as they stream in.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        headers = dict(scope.get("headers") or [])
        declared = headers.get(b"content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_bytes:
            await _error(413, TOO_LARGE)(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise HTTPException(status_code=413, detail=TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)


def create_app(style_app: StyleMatcherApp | None = None) -> FastAPI:
    """Build the FastAPI instance around a :class:`StyleMatcherApp`."""

    configure_logging()
    matcher = style_app or StyleMatcherApp()
    api = FastAPI(title="Style Matcher", version=matcher.config.version)
    api.state.matcher = matcher

    @api.exception_handler(ValidationFailure)
    async def _validation_failure(_: Request, exc: ValidationFailure) -> JSONResponse:
        return _error(400, exc.message, details=exc.details)

    @api.exception_handler(RequestValidationError)
    async def _request_invalid(_: Request, exc: RequestValidationError) -> JSONResponse:
        details = [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]
        return _error(400, "Invalid request", details=details)

    @api.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @api.exception_handler(UnknownSessionError)
    async def _unknown_session(_: Request, exc: UnknownSessionError) -> JSONResponse:
        return _error(404, f"Unknown session {exc.args[0] if exc.args else ''}".strip())

    @api.get("/api/health")
    def health() -> dict:
        """Lightweight readiness probe."""

        return matcher.health()

    @api.post("/api/upload")
    def upload(
        images: List[UploadFile] = File(default=[]),
        session_id: Optional[str] = Form(default=None),
    ):
        """Store and analyse uploaded clothing images."""

        if not images:
            return _error(400, "No images provided")
        files = [(upload.filename or "", upload.file.read()) for upload in images]
        return matcher.upload_images(files, session_id=session_id or None)

    @api.post("/api/generate-combinations")
    def generate_combinations(payload: Dict[str, Any]) -> dict:
        """Score outfit combinations for at least two images."""

        return matcher.generate_combinations(payload)

    @api.post("/api/analyze-image")
    def analyze_image(image: Optional[UploadFile] = File(default=None)):
        """Return the color analysis for one image without storing it."""

        if image is None or not image.filename:
            return _error(400, "No image provided")
        return matcher.analyze_image(image.filename, image.file.read())

    @api.post("/api/sessions")
    def create_session() -> dict:
        """Start a working set for one browser session."""

        return {"session_id": matcher.start_session()}

    @api.get("/api/sessions/{session_id}")
    def get_session(session_id: str) -> dict:
        return matcher.session_summary(session_id)

    @api.delete("/api/sessions/{session_id}/images/{image_id}")
    def remove_image(session_id: str, image_id: str):
        if not matcher.remove_image(session_id, image_id):
            return _error(404, f"Unknown image {image_id}")
        return {"success": True, "images": matcher.session_summary(session_id)["images"]}

    @api.post("/api/sessions/{session_id}/saved/{combination_id}")
    def save_combination(session_id: str, combination_id: int):
        saved = matcher.save_combination(session_id, combination_id)
        if saved is None:
            return _error(404, f"Unknown combination {combination_id}")
        return {"success": True, "combination": saved}

    api.add_middleware(BodySizeLimitMiddleware, max_bytes=matcher.config.max_content_length)
    api.mount("/uploads", StaticFiles(directory=str(matcher.upload_store.base_dir)), name="uploads")
    return api


app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    matcher_config = app.state.matcher.config
    uvicorn.run("server.api:app", host=matcher_config.host, port=matcher_config.port, reload=False)
