import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import redis
from resume_tailor.services.config import settings

logger = logging.getLogger("uvicorn.error")

redis_client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)


class ArtifactStore:
    """Generated artifacts (ATS reports, resumes, cover letters) kept in Redis with a TTL."""

    key_prefix = "artifact"

    def __init__(self, client, ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    def _key(self, artifact_id: str) -> str:
        return f"{self.key_prefix}:{artifact_id}"

    def save(self, kind: str, payload: Any) -> str:
        artifact_id = str(uuid.uuid4())
        record = {
            "kind": kind,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "data": payload,
        }
        self.client.setex(self._key(artifact_id), self.ttl_seconds, json.dumps(record))
        logger.info(f"Cached {kind} under key: {self._key(artifact_id)}")
        return artifact_id

    def get(self, artifact_id: str) -> Optional[dict]:
        data = self.client.get(self._key(artifact_id))
        if not data:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)


artifact_store = ArtifactStore(redis_client, settings.ARTIFACT_TTL_SECONDS)


def get_artifact_store() -> ArtifactStore:
    return artifact_store
