from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from pydantic import BaseModel, Field

from agent.agent import PromptAdapter, build_adapter
from agent.core.errors import ChatError, InvalidRequestError
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("cybermedassist")


class ChatTurn(BaseModel):
    role: str = Field(..., description="'user', 'assistant' or 'system'")
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatTurn] = Field(
        ..., description="Full conversation, oldest first (frontend-managed)"
    )


def _error(exc: ChatError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(adapter: Optional[PromptAdapter] = None) -> FastAPI:
    """Build the API.

    The adapter is created once at startup unless one is passed in, and is
    handed to requests through ``app.state``.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "adapter", None) is None:
            app.state.adapter = build_adapter()
            logger.info("Adapter ready: backend=%s", app.state.adapter.gateway.name)
        yield

    app = FastAPI(title="CyberMedAssist Chat API", version="1.0.0", lifespan=lifespan)
    app.state.adapter = adapter

    # CORS: allow local frontend during development
    settings = get_settings()
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected chat request: %s", exc.errors()[:3])
        return _error(InvalidRequestError())

    @app.post("/api/chat")
    def chat(req: ChatRequest, request: Request) -> Any:
        try:
            chat_adapter: PromptAdapter = request.app.state.adapter
            history = [t.model_dump() for t in req.messages]
            logger.info("Incoming chat: turns=%s", len(history))
            content = chat_adapter.complete(history)
            logger.info("Model responded: %s chars", len(content))
            return {"content": content}
        except ChatError as e:
            logger.warning("Chat request failed (%s): %s", e.status_code, e.message)
            return _error(e)
        except Exception as e:
            logger.exception("Chat processing failed: %s", e)
            return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=8000)
