"""FastAPI front door for sending SSCS appeals to robotics."""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, File, Form, Header, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from robotics import dispatcher
from robotics.models import IdamTokens, SscsCaseData, SscsCaseDetails
from robotics.plugins.case_renderer import render_case_pdf
from robotics.utils.errors import PayloadError, RoboticsError, TransportError

APP_TITLE = "SSCS Robotics Dispatch"

logger = logging.getLogger(__name__)

app = FastAPI(title=APP_TITLE)


def _parse_case_data(raw: str) -> SscsCaseData:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"case_data is not valid JSON: {exc}")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="case_data must be a JSON object.")
    return SscsCaseData.from_ccd(data)


def _read_evidence(files: Optional[List[UploadFile]]) -> Dict[Optional[str], bytes]:
    evidence: Dict[Optional[str], bytes] = {}
    for upload in files or []:
        # Attachments are keyed by filename; a second file would replace the first
        if upload.filename in evidence:
            raise HTTPException(
                status_code=400,
                detail=f"Duplicate evidence filename: {upload.filename!r}",
            )
        evidence[upload.filename] = upload.file.read()
    return evidence


def _idam_tokens(
    authorization: Optional[str],
    service_authorization: Optional[str],
    user_id: Optional[str]
) -> IdamTokens:
    if not authorization or not service_authorization:
        raise HTTPException(
            status_code=401,
            detail="Authorization and ServiceAuthorization headers are required to update the case.",
        )
    return IdamTokens(
        idam_oauth2_token=authorization,
        service_authorization=service_authorization,
        user_id=user_id or "",
    )


def _error_response(status_code: int, error: RoboticsError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error.to_dict()})


@app.get("/health")
async def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/robotics")
def send_to_robotics(
    case_data: str = Form(...),
    case_id: int = Form(...),
    postcode: str = Form(...),
    render_pdf: bool = Form(False),
    attach_to_case: bool = Form(False),
    pdf: Optional[UploadFile] = File(None),
    evidence: Optional[List[UploadFile]] = File(None),
    authorization: Optional[str] = Header(None),
    service_authorization: Optional[str] = Header(None, alias="ServiceAuthorization"),
    user_id: Optional[str] = Header(None, alias="user-id"),
) -> JSONResponse:
    # Reject bad requests before anything is emailed
    idam_tokens = (
        _idam_tokens(authorization, service_authorization, user_id) if attach_to_case else None
    )
    additional_evidence = _read_evidence(evidence)

    try:
        sscs_case_data = _parse_case_data(case_data)

        pdf_bytes: Optional[bytes] = pdf.file.read() if pdf is not None else None
        if pdf_bytes is None and render_pdf:
            pdf_bytes = render_case_pdf(sscs_case_data, case_id)

        robotics_json = dispatcher.send_case_to_robotics(
            case_data=sscs_case_data,
            case_id=case_id,
            postcode=postcode,
            pdf=pdf_bytes,
            additional_evidence=additional_evidence,
        )
    except PayloadError as exc:
        return _error_response(422, exc)
    except TransportError as exc:
        return _error_response(502, exc)

    if idam_tokens is not None:
        try:
            dispatcher.attach_robotics_json_to_case(
                robotics_json,
                sscs_case_data,
                idam_tokens,
                SscsCaseDetails(id=case_id, data=sscs_case_data),
            )
        except TransportError as exc:
            # The email has already gone; report the failed write-back without failing the request
            logger.error(f"Case {case_id}: robotics JSON not stored in CCD: {exc}")

    return JSONResponse(robotics_json)
