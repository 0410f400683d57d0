from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agent.agent import ReplyGenerator, get_generator
from agent.core.prompt import HANDLER_ERROR, UPSTREAM_EMPTY_ERROR
from agent.models import AgentError, AgentReply, AgentRequest
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("jarvispark")

app = FastAPI(title="JarviSpark Agent", version="1.0.0")

# CORS: allow the browser widget during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    # A body that cannot be decoded is a handler failure like any other.
    logger.error("Rejected request body on %s: %s", request.url.path, exc.errors())
    clean_error = " ".join(str(exc).split())[:500]
    return _error(clean_error or HANDLER_ERROR, 500)


@app.post(
    "/api/agent",
    response_model=AgentReply,
    responses={500: {"model": AgentError}, 502: {"model": AgentError}},
)
def agent_reply(req: AgentRequest, generator: ReplyGenerator = Depends(get_generator)):
    messages = req.messages or []
    logger.info(
        "Incoming transcript: turns=%s generator=%s",
        len(messages),
        type(generator).__name__,
    )

    try:
        text = generator.generate(messages)
    except Exception as e:
        logger.exception("[agent-route-error] %s", e)
        return _error(str(e) or HANDLER_ERROR, 500)

    if not text:
        logger.warning("Upstream produced an empty reply for %s turns", len(messages))
        return _error(UPSTREAM_EMPTY_ERROR, 502)

    logger.info("Agent responded with %s chars", len(text))
    return AgentReply(text=text)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.app_env == "development")
