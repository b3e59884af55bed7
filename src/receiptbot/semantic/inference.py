"""LLM inference for receipt extraction via Amazon Bedrock."""

import json
import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from ..models import ExtractionRequest

logger = logging.getLogger(__name__)


class BedrockClient:
    """Client for Anthropic models served through Bedrock InvokeModel."""

    def __init__(
        self,
        model_id: str,
        region_name: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: float = 0.1,
        client=None,
    ):
        """Initialize inference client.

        Args:
            model_id: Bedrock model or inference profile ID
            region_name: AWS region (defaults to the Lambda runtime region)
            max_tokens: Maximum tokens in the model response
            temperature: Sampling temperature
            client: Optional pre-built bedrock-runtime client (for testing)
        """
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = client or boto3.client("bedrock-runtime", region_name=region_name)
        logger.info(f"Inference client initialized with model: {model_id}")

    def invoke(self, request: ExtractionRequest) -> str:
        """Send an extraction request and return the model's raw text.

        Args:
            request: Extraction request

        Returns:
            str: Concatenated text blocks of the response (may be empty)

        Raises:
            ClientError: If the Bedrock call fails
        """
        body = request.to_body(max_tokens=self.max_tokens, temperature=self.temperature)

        logger.info(
            f"Sending request to {self.model_id} ({len(request.images)} image(s))"
        )
        try:
            response = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(body),
            )
        except ClientError as e:
            logger.error(f"Bedrock invocation failed: {e}")
            raise

        response_body = json.loads(response["body"].read())
        text = "".join(
            block.get("text", "")
            for block in response_body.get("content", [])
            if isinstance(block, dict) and block.get("type", "text") == "text"
        ).strip()

        logger.debug(f"Raw model response: {text}")
        return text
