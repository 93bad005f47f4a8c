# app/services/documents.py
import base64
import binascii
import logging
import mimetypes
import time
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sqlalchemy.orm import Session

from app.exceptions import UploadFailed, ValidationFailed
from app.models.applicant import Applicant, DocumentKind, empty_documents
from app.schemas.sections import DocumentFile
from app.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

KB = 1024
MB = 1024 * KB

IMAGE_TYPES = ("image/jpeg", "image/png")
SCAN_TYPES = ("application/pdf", "image/jpeg", "image/png")

MAGIC_NUMBERS = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"%PDF", "application/pdf"),
)


@dataclass(frozen=True)
class DocumentRule:
    allowed_types: Tuple[str, ...]
    min_bytes: int
    max_bytes: int


DOCUMENT_RULES: Dict[DocumentKind, DocumentRule] = {
    DocumentKind.passport_photo: DocumentRule(IMAGE_TYPES, 1 * KB, 2 * MB),
    DocumentKind.signature: DocumentRule(IMAGE_TYPES, 1 * KB, 1 * MB),
    DocumentKind.class10_marksheet: DocumentRule(SCAN_TYPES, 1 * KB, 5 * MB),
    DocumentKind.class12_marksheet: DocumentRule(SCAN_TYPES, 1 * KB, 5 * MB),
    DocumentKind.iti_marksheet: DocumentRule(SCAN_TYPES, 1 * KB, 5 * MB),
    DocumentKind.cast_certificate: DocumentRule(SCAN_TYPES, 1 * KB, 5 * MB),
}


def parse_kind(key: str) -> DocumentKind:
    try:
        return DocumentKind(key)
    except ValueError:
        raise ValidationFailed(f"Unknown document type: {key}")


def _decode(kind: DocumentKind, data: str) -> bytes:
    # Accept data URLs as produced by FileReader.readAsDataURL
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationFailed(f"{kind.value} is not valid base64 data")


def detect_content_type(file: DocumentFile, content: bytes) -> Optional[str]:
    if file.type:
        return file.type.lower()
    if file.name:
        guessed, _ = mimetypes.guess_type(file.name)
        if guessed:
            return guessed
    for magic, content_type in MAGIC_NUMBERS:
        if content.startswith(magic):
            return content_type
    return None


def validate_document(kind: DocumentKind, file: DocumentFile) -> Tuple[bytes, str]:
    """Decode the payload and check it against the rule for its kind."""
    rule = DOCUMENT_RULES[kind]
    content = _decode(kind, file.data)

    content_type = detect_content_type(file, content)
    if content_type not in rule.allowed_types:
        raise ValidationFailed(
            f"{kind.value} must be one of {', '.join(rule.allowed_types)}"
        )

    if not rule.min_bytes <= len(content) <= rule.max_bytes:
        raise ValidationFailed(
            f"{kind.value} must be between {rule.min_bytes // KB} KB and {rule.max_bytes // KB} KB"
        )
    return content, content_type


def upload_documents(
    db: Session,
    applicant: Applicant,
    files: Dict[str, Optional[DocumentFile]],
    blob_store: BlobStore,
) -> dict:
    """
    Validate every entry first, then push them to the blob store one at a
    time. A failed upload aborts the request before anything is committed;
    blobs already written for this request are left in place.
    """
    prepared = []
    for key, file in files.items():
        kind = parse_kind(key)
        if file is None:
            continue
        content, content_type = validate_document(kind, file)
        prepared.append((kind, content, content_type))

    if not prepared:
        raise ValidationFailed("No documents uploaded")

    urls = {}
    for kind, content, content_type in prepared:
        blob_key = f"{applicant.applicant_id}_{kind.value}_{int(time.time() * 1000)}"
        try:
            urls[kind.value] = blob_store.upload(applicant.applicant_id, blob_key, content, content_type)
        except Exception as e:
            logger.error(f"❌ Error uploading {kind.value} for {applicant.applicant_id}: {str(e)}")
            db.rollback()
            raise UploadFailed(f"Failed to upload {kind.value}")

    applicant.document_details = {**empty_documents(), **(applicant.document_details or {}), **urls}
    db.commit()
    db.refresh(applicant)
    logger.info(f"📄 Stored {len(urls)} document(s) for {applicant.applicant_id}: {', '.join(urls)}")
    return applicant.document_details


def delete_all_documents(db: Session, applicant: Applicant, blob_store: BlobStore) -> None:
    try:
        blob_store.delete_namespace(applicant.applicant_id)
    except Exception as e:
        # Metadata is cleared even when the remote delete fails
        logger.warning(f"⚠️ Blob deletion failed for {applicant.applicant_id}: {str(e)}")

    applicant.document_details = empty_documents()
    db.commit()
    logger.info(f"🗑️ Cleared documents for {applicant.applicant_id}")
