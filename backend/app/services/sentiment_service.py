"""
Sentiment analyzer - scores feedback text from 1 to 5 with a Hugging Face
inference model (nlptown/bert-base-multilingual-uncased-sentiment).
"""
import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from app.config import Config
from app.errors import ErrorType
from app.exceptions import AppException

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5


@dataclass(frozen=True)
class SentimentResult:
    score: int
    label: str
    confidence: float


def parse_sentiment_response(data) -> SentimentResult:
    """Pick the highest-confidence label from the model output.

    The model answers ``[[{"label": "4 stars", "score": 0.61}, ...]]``; a flat
    list of label/score objects is accepted too.
    """
    candidates = data
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], list):
        candidates = candidates[0]

    if not isinstance(candidates, list) or not candidates:
        raise ValueError("unexpected response format")

    try:
        best = max(candidates, key=lambda c: float(c["score"]))
        label = str(best["label"])
        score = int(label.strip()[0])
    except (TypeError, KeyError, ValueError, IndexError):
        raise ValueError("unexpected response format")

    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(f"score {score} out of range")

    return SentimentResult(score=score, label=label, confidence=float(best["score"]))


class SentimentAnalyzer:
    """Client for the sentiment inference endpoint."""

    def __init__(
        self,
        url: str = None,
        token: str = None,
        timeout: float = None,
        client: httpx.AsyncClient | None = None
    ):
        self.url = url or Config.SENTIMENT_MODEL_URL
        token = Config.HUGGING_FACE_TOKEN if token is None else token
        self.headers = {"Content-Type": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.client = client or httpx.AsyncClient(timeout=timeout or Config.SENTIMENT_TIMEOUT)

    async def analyze(self, text: str) -> SentimentResult:
        """Score a feedback text.

        Raises:
            AppException: ENRICHMENT_FAILED on network errors, non-2xx
                responses, or an unexpected response shape
        """
        try:
            response = await self.client.post(self.url, json={"inputs": text}, headers=self.headers)
            response.raise_for_status()
            result = parse_sentiment_response(response.json())
        except httpx.HTTPStatusError as e:
            reason = _error_detail(e.response)
            logger.error(f"Sentiment analysis failed with status {e.response.status_code}: {reason}")
            raise AppException(ErrorType.ENRICHMENT_FAILED, f"Error while analyzing the feedback: {reason}")
        except httpx.HTTPError as e:
            logger.error(f"Sentiment analysis request failed: {e!r}")
            raise AppException(ErrorType.ENRICHMENT_FAILED, "Error while analyzing the feedback: service unreachable")
        except ValueError as e:
            logger.error(f"Sentiment analysis returned bad data: {e}")
            raise AppException(ErrorType.ENRICHMENT_FAILED, f"Error while analyzing the feedback: {e}")

        logger.debug(f"Sentiment {result.label} ({result.confidence:.2f})")
        return result

    async def aclose(self):
        await self.client.aclose()


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


def get_analyzer(request: Request) -> SentimentAnalyzer:
    """Dependency returning the analyzer created in the app lifespan."""
    return request.app.state.analyzer
