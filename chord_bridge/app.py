from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse

try:
    from config import get_settings
    from constants import APP_NAME, BRIDGE_HOST, BRIDGE_PORT
    from errors import GenerationTimeoutError, ParseError, PitchResolutionError, SchemaError, UpstreamError
    from logger_config import logger
    from models import ProgressionRequest
    from requester import ProgressionRequester
    from service import request_chord_progression
    from utils import summarize_text
except ImportError:
    from .config import get_settings
    from .constants import APP_NAME, BRIDGE_HOST, BRIDGE_PORT
    from .errors import GenerationTimeoutError, ParseError, PitchResolutionError, SchemaError, UpstreamError
    from .logger_config import logger
    from .models import ProgressionRequest
    from .requester import ProgressionRequester
    from .service import request_chord_progression
    from .utils import summarize_text

app = FastAPI(title=APP_NAME)


def get_requester() -> ProgressionRequester:
    return ProgressionRequester(get_settings())


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/progression")
def progression(
    request: ProgressionRequest,
    requester: ProgressionRequester = Depends(get_requester),
) -> JSONResponse:
    if not request.message or not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    logger.info("Progression request: %s", summarize_text(request.message))
    try:
        result = request_chord_progression(
            request.message,
            bpm=request.bpm,
            key=request.key,
            requester=requester,
            model=request.model,
        )
    except GenerationTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc)) from exc
    except UpstreamError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except ParseError as exc:
        logger.error("LLM JSON parse failed: %s", summarize_text(exc.raw_text))
        raise HTTPException(
            status_code=502,
            detail={"error": str(exc), "raw_text": summarize_text(exc.raw_text)},
        ) from exc
    except SchemaError as exc:
        raise HTTPException(status_code=502, detail={"error": str(exc), "errors": exc.errors}) from exc
    except PitchResolutionError as exc:
        logger.error("Pitch resolution failed: %s", exc)
        raise HTTPException(status_code=422, detail={"error": str(exc), "note": str(exc.note)}) from exc

    response = result.to_response()
    logger.info(
        "Response built: tempo=%s chords=%d notes=%d names=%s",
        response.tempo,
        len(response.chords),
        len(response.notes),
        response.chord_names,
    )
    return JSONResponse(content=response.model_dump())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=BRIDGE_HOST, port=BRIDGE_PORT, log_level="info")
