from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studio.db import get_db
from studio.deps.lookups import get_media
from studio.models.media import Media
from studio.schemas.media import (
    MediaClassification,
    MediaCreate,
    MediaOut,
    MediaStatusOut,
    MediaStatusUpdate,
)
from studio.schemas.trigger_payload import build_payload
from studio.services.workflow_service import fire_trigger


router = APIRouter(prefix="/media", tags=["media"])

BYTES_PER_MB = 1024 * 1024


@router.get("", response_model=list[MediaOut])
def list_media(
    status: str | None = None,
    detected_type: str | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(Media)
    if status:
        q = q.filter(Media.processing_status == status)
    if detected_type:
        q = q.filter(Media.detected_type == detected_type)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(Media.created_at.desc()).offset(offset).limit(limit).all()


@router.post("", response_model=MediaOut, status_code=201)
def register_media(payload: MediaCreate, db: Session = Depends(get_db)):
    media = Media(
        filename=payload.filename,
        mime_type=payload.mime_type,
        size=payload.size,
        original_url=payload.original_url,
        tags=list(dict.fromkeys(payload.tags)),
        flags=[],
        processing_status="pending",
    )
    db.add(media)
    db.commit()
    db.refresh(media)

    fire_trigger(
        db,
        "on_upload",
        build_payload(
            "on_upload",
            mime_type=media.mime_type,
            size=round(media.size / BYTES_PER_MB, 3),
            filename=media.filename,
        ),
        media=media,
    )
    db.refresh(media)
    return media


@router.get("/{media_id}", response_model=MediaOut)
def get_media_record(media: Media = Depends(get_media)):
    return media


@router.get("/{media_id}/status", response_model=MediaStatusOut)
def get_media_status(media: Media = Depends(get_media)):
    status = media.processing_status
    done = status in ("completed", "failed")
    return {
        "id": media.id,
        "status": status,
        "processing": status in ("pending", "processing"),
        "failed": status == "failed",
        "data": MediaOut.model_validate(media).model_dump(mode="json") if done else None,
    }


@router.patch("/{media_id}/status", response_model=MediaOut)
def update_media_status(
    payload: MediaStatusUpdate,
    media: Media = Depends(get_media),
    db: Session = Depends(get_db),
):
    old_status = media.processing_status
    if payload.status == old_status:
        return media

    media.processing_status = payload.status
    db.commit()
    db.refresh(media)

    fire_trigger(
        db,
        "on_status_change",
        build_payload("on_status_change", old_status=old_status, new_status=payload.status),
        media=media,
    )
    db.refresh(media)
    return media


@router.post("/{media_id}/classification", response_model=MediaOut)
def classify_media(
    payload: MediaClassification,
    media: Media = Depends(get_media),
    db: Session = Depends(get_db),
):
    media.detected_type = payload.detected_type
    media.detection_confidence = payload.confidence
    if payload.tags:
        media.tags = list(dict.fromkeys(list(media.tags or []) + payload.tags))
    db.commit()
    db.refresh(media)

    fire_trigger(
        db,
        "on_classification",
        build_payload(
            "on_classification",
            detected_type=media.detected_type,
            min_confidence=media.detection_confidence,
            has_tags=list(media.tags or []),
        ),
        media=media,
    )
    db.refresh(media)
    return media
