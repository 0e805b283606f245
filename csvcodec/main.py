import hashlib
import logging
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from pydantic import ValidationError

from .encoding import decode_csv_bytes
from .errors import MalformedInputError
from .models import (
    HealthResponse,
    ParseConfig,
    ParseRequest,
    ParseResponse,
    StringifyRequest,
    StringifyResponse,
    summarize,
)
from .parser import parse
from .rules import ACCEPTED_UPLOAD_SUFFIXES, OUTPUT_ENCODING
from .serialize import stringify

logger = logging.getLogger("csv-codec")

app = FastAPI(
    title="csv-codec",
    description="Parse and serialize delimited text tables",
    version="0.1.0",
)


def _parse_or_422(text: str, source_label: str, config: ParseConfig):
    try:
        return parse(text, source_label, config)
    except MalformedInputError as exc:
        logger.info("rejected malformed input: %s", exc)
        raise HTTPException(status_code=422, detail=exc.to_dict())


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/parse", response_model=ParseResponse)
def parse_text(request: ParseRequest):
    rows = _parse_or_422(request.text, request.source_label, request.config)
    return ParseResponse(rows=rows, summary=summarize(rows))


@app.post("/parse/upload", response_model=ParseResponse)
async def parse_upload(
    file: UploadFile = File(...),
    separator: str = Query(","),
    quote: str = Query('"'),
    escape: Optional[str] = Query(None),
    skip_initial_space: bool = Query(False),
    skip_blank_last: bool = Query(False),
):
    filename = file.filename or ""
    if not filename.lower().endswith(ACCEPTED_UPLOAD_SUFFIXES):
        raise HTTPException(status_code=422, detail="Only CSV, TSV or TXT files are supported")

    try:
        config = ParseConfig(
            separator=separator,
            quote=quote,
            escape=escape,
            skip_initial_space=skip_initial_space,
            skip_blank_last=skip_blank_last,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))

    raw = await file.read()
    text, report = decode_csv_bytes(raw)
    rows = _parse_or_422(text, filename, config)
    return ParseResponse(rows=rows, summary=summarize(rows), decoding=report)


@app.post("/stringify", response_model=StringifyResponse)
def stringify_table(request: StringifyRequest):
    text = stringify(request.rows, request.config)
    return StringifyResponse(
        text=text,
        sha256=hashlib.sha256(text.encode(OUTPUT_ENCODING)).hexdigest(),
    )
