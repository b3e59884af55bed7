"""Pydantic models for parsed emails, extraction results and ledger output."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .taxonomy import DEFAULT_ACCOUNT_CATEGORY, DEFAULT_ITEM_NAME, DEFAULT_PAYMENT_METHOD


# ============================================================================
# Email Models (read-only input to the pipeline)
# ============================================================================


class EmailAttachment(BaseModel):
    """Email attachment with raw data."""

    filename: str
    content_type: str
    data: bytes
    size_bytes: int


class ParsedEmail(BaseModel):
    """Parsed email data."""

    subject: str = ""
    from_header: str = ""  # Raw From header, e.g. "Taro <taro@example.com>"
    from_address: Optional[str] = None  # First address parsed from the header
    to_address: Optional[str] = None
    date: str = ""
    body_text: Optional[str] = None
    body_html: Optional[str] = None
    attachments: list[EmailAttachment] = Field(default_factory=list)
    message_id: Optional[str] = None


# ============================================================================
# Extraction Models
# ============================================================================


class ImageAttachment(BaseModel):
    """Image attachment selected for inline submission to the model."""

    media_type: str = Field(description="image/jpeg, image/png or image/webp")
    data: str = Field(description="Base64-encoded image bytes")
    filename: Optional[str] = None


class ExtractionRequest(BaseModel):
    """Single-turn extraction request: instruction text plus inline images."""

    prompt: str
    images: list[ImageAttachment] = Field(default_factory=list)

    def to_body(self, max_tokens: int = 1000, temperature: float = 0.1) -> dict:
        """Render the Anthropic Messages body expected by Bedrock InvokeModel.

        The text block comes first and each image follows as its own block.
        """
        content: list[dict] = [{"type": "text", "text": self.prompt}]
        for image in self.images:
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.media_type,
                    "data": image.data,
                },
            })

        return {
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": content}],
        }


class ExtractedItem(BaseModel):
    """A validated receipt line item. Every field is always populated."""

    name: str = Field(DEFAULT_ITEM_NAME, description="Product or service name")
    amount: Union[int, float] = Field(0, description="Amount in yen")
    payment_method: str = Field(DEFAULT_PAYMENT_METHOD, alias="paymentMethod")
    account_category: str = Field(DEFAULT_ACCOUNT_CATEGORY, alias="accountCategory")

    model_config = ConfigDict(populate_by_name=True)


class ExtractedData(BaseModel):
    """Sanitized model output for one email."""

    items: list[ExtractedItem] = Field(default_factory=list)
    total: Optional[Union[int, float]] = None


# ============================================================================
# Credentials
# ============================================================================


class GoogleCredentials(BaseModel):
    """Google service account key as stored in Secrets Manager."""

    type: str
    project_id: str
    private_key_id: str
    private_key: str
    client_email: str
    client_id: str
    auth_uri: str
    token_uri: str
    auth_provider_x509_cert_url: str
    client_x509_cert_url: str

    # Keep fields such as universe_domain for the google-auth loader
    model_config = ConfigDict(extra="allow")


# ============================================================================
# Processing Result Models
# ============================================================================


class ProcessingMetrics(BaseModel):
    """Timings for a single email invocation."""

    total_time_sec: float
    parse_time_sec: float
    extraction_time_sec: float = 0.0
    ledger_time_sec: float = 0.0
    num_images: int = 0
    num_items: int = 0


class ProcessingResult(BaseModel):
    """Outcome of processing one stored email."""

    bucket: str
    key: str
    status: str  # "recorded", "unauthorized", "empty", "no_items"
    data: Optional[ExtractedData] = None
    start_row: Optional[int] = None
    rows_written: int = 0
    metrics: Optional[ProcessingMetrics] = None
