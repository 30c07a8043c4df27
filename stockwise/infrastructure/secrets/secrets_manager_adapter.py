"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() runs once at startup, before Settings.from_env(), so values
such as GEMINI_API_KEY, JWT_SECRET or LANGFUSE_* can live in a single JSON
secret instead of the container environment.
"""

import json
import logging
import os

import boto3

from stockwise.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN or name."""
        response = self._client.get_secret_value(SecretId=secret_id)
        secret = json.loads(response["SecretString"])
        if not isinstance(secret, dict):
            raise ValueError(f"Secret {secret_id!r} is not a JSON object")
        return secret

    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        """Inject the secret's key-value pairs into os.environ.

        Variables already set in the environment win unless *overwrite* is True.
        Returns the names of the variables that were set.
        """
        loaded = []
        for key, value in self.get_secret(secret_id).items():
            if not overwrite and key in os.environ:
                continue
            os.environ[key] = str(value)
            loaded.append(key)
        logger.info("Loaded %d variable(s) from secret %s", len(loaded), secret_id)
        return loaded
