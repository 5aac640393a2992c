from fastapi import APIRouter, Depends, HTTPException

from ..database import RecordStore, get_record_store
from ..schemas.content_schema import LegalDocumentOut, SiteContentOut
from ..services.content_service import (
    LEGAL_DOCUMENTS,
    get_site_content,
    legal_paragraphs,
    with_defaults,
)

router = APIRouter(prefix="/site-content", tags=["site-content"])


@router.get("", response_model=SiteContentOut)
async def read_site_content(store: RecordStore = Depends(get_record_store)):
    """
    Footer links and legal text. Missing keys are filled with defaults.
    """
    result = await get_site_content(store)
    return with_defaults(result.data)


@router.get("/legal/{document}", response_model=LegalDocumentOut)
async def read_legal_document(document: str, store: RecordStore = Depends(get_record_store)):
    """
    Privacy policy or terms of service split into paragraphs.
    """
    if document not in LEGAL_DOCUMENTS:
        raise HTTPException(status_code=404, detail="Document not found")

    key, title = LEGAL_DOCUMENTS[document]
    content = with_defaults((await get_site_content(store)).data)
    return LegalDocumentOut(
        document=document,
        title=title,
        paragraphs=legal_paragraphs(getattr(content, key)),
    )
