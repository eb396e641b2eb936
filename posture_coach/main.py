# posture_coach/main.py
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .completion import CompletionClient
from .config import configure_logging, get_settings
from .errors import AnalysisError, ProviderError
from .llm_agent import analyze_assessment
from .models import AnalysisResult, AnalyzeRequest

configure_logging()

app = FastAPI(title="Posture Coach Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.exception_handler(AnalysisError)
def analysis_error_handler(request, exc: AnalysisError):
    # registered handlers run inside CORSMiddleware, so errors keep CORS headers
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def completion_client() -> Optional[CompletionClient]:
    """
    None lets analyze_assessment pick the configured provider after the
    assessment has been checked; tests override this with a fake.
    """
    return None


@app.get("/")
def health_check():
    try:
        provider = get_settings().completion_provider
    except ValueError as e:
        raise ProviderError(f"invalid configuration: {e}") from e
    return {"status": "ok", "provider": provider}


@app.post("/analyze-posture", response_model=AnalysisResult)
def analyze_posture(req: AnalyzeRequest, client: Optional[CompletionClient] = Depends(completion_client)):
    return analyze_assessment(req.assessment, client=client)
