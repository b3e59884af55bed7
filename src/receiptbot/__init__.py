"""Receipt extraction pipeline - inbound email in, ledger rows out."""

# Models
from .models import (
    EmailAttachment,
    ParsedEmail,
    ImageAttachment,
    ExtractionRequest,
    ExtractedItem,
    ExtractedData,
    GoogleCredentials,
    ProcessingMetrics,
    ProcessingResult,
)

# Processing
from .processing import EmailParser

# Semantic
from .semantic import BedrockClient

# Storage
from .storage import S3Client, SecretsClient, SheetsLedger

# Pipeline
from .pipeline import ReceiptPipeline

# Configuration
from .config import Config

__version__ = "0.1.0"

__all__ = [
    # Models
    "EmailAttachment",
    "ParsedEmail",
    "ImageAttachment",
    "ExtractionRequest",
    "ExtractedItem",
    "ExtractedData",
    "GoogleCredentials",
    "ProcessingMetrics",
    "ProcessingResult",
    # Components
    "EmailParser",
    "BedrockClient",
    "S3Client",
    "SecretsClient",
    "SheetsLedger",
    "ReceiptPipeline",
    "Config",
]
