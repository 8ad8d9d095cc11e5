import traceback

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from wireframer.config import get_settings
from wireframer.errors import InputError, WireframeError
from wireframer.pipeline import WireframePipeline, WireframeRequest


app = FastAPI(title="Wireframe API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class GenerateFromUrlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str | None = None
    design_system: str = Field("microsoft", alias="designSystem")
    include_responsive: bool = Field(True, alias="includeResponsive")
    include_accessibility: bool = Field(True, alias="includeAccessibility")


ENDPOINT_DESCRIPTOR = {
    "status": "ok",
    "endpoint": "generateWireframeFromUrl",
    "description": "Analyzes a website URL and generates a wireframe",
    "method": "POST",
    "requiredParams": ["url"],
    "optionalParams": ["designSystem", "includeResponsive", "includeAccessibility"],
}


def get_pipeline() -> WireframePipeline:
    return WireframePipeline()


def _failure(status_code: int, error: str, exc: BaseException | None = None) -> JSONResponse:
    body = {"success": False, "error": error}
    if exc is not None and get_settings().environment == "development":
        body["details"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=status_code, content=body)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/")
def root():
    return {"message": "Wireframe backend is running"}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/generate-wireframe-from-url")
async def describe_generate_from_url():
    """Static descriptor. Never starts a browser."""
    return ENDPOINT_DESCRIPTOR


@app.post("/generate-wireframe-from-url")
async def generate_from_url(
    request: GenerateFromUrlRequest,
    pipeline: WireframePipeline = Depends(get_pipeline),
):
    """Render a live page and return a reconciled HTML wireframe of it."""
    if not request.url or not request.url.strip():
        return _failure(400, "URL is required")

    try:
        return await pipeline.run(WireframeRequest(
            url=request.url,
            design_system=request.design_system,
            include_responsive=request.include_responsive,
            include_accessibility=request.include_accessibility,
        ))
    except InputError as e:
        return _failure(e.status_code, e.message)
    except WireframeError as e:
        print(f"[generate-wireframe-from-url] {type(e).__name__}: {e.message}")
        return _failure(e.status_code, e.message, e)
    except Exception as e:
        print(f"[generate-wireframe-from-url] Unexpected error: {e}")
        return _failure(500, "Failed to generate wireframe from URL", e)


def run():
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
