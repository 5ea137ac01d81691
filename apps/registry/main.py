from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_client import Counter, make_asgi_app

from .codec import DOCUMENT_KINDS, LIST_KINDS, decode_document, encode_document
from .config import get_settings
from .consistency import check_asset, check_asset_list, check_chain
from .errors import DecodeError

settings = get_settings()
logger = logging.getLogger(__name__)

DOCUMENTS_DECODED_TOTAL = Counter(
    'registry_documents_decoded_total',
    'Registry documents decoded through the API',
    ['kind', 'outcome']
)

CHECKS = {
    'asset': check_asset,
    'assetlist': check_asset_list,
    'chain': check_chain
}

app = FastAPI(title=settings.app_name, default_response_class=ORJSONResponse)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[x.strip() for x in settings.cors_origins.split(',') if x.strip()],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*']
)
app.mount('/metrics', make_asgi_app())


def _decode(kind: str, payload: Any) -> Any:
    if kind not in DOCUMENT_KINDS:
        raise HTTPException(status_code=404, detail=f'unknown document kind {kind}')

    workers = get_settings().decode_workers
    try:
        if workers > 1 and kind in LIST_KINDS:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                value = decode_document(kind, payload, executor=executor)
        else:
            value = decode_document(kind, payload)
    except DecodeError as exc:
        DOCUMENTS_DECODED_TOTAL.labels(kind=kind, outcome=exc.code).inc()
        logger.info('decode rejected kind=%s error=%s detail=%s', kind, exc.code, exc.detail)
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc

    DOCUMENTS_DECODED_TOTAL.labels(kind=kind, outcome='ok').inc()
    return value


@app.get('/health')
def health() -> dict:
    return {'status': 'ok', 'app': settings.app_name}


@app.get('/kinds')
def kinds() -> dict:
    return {'kinds': sorted(DOCUMENT_KINDS)}


@app.post('/documents/{kind}/decode')
def decode_endpoint(kind: str, payload: Any = Body(...)) -> dict:
    value = _decode(kind, payload)
    return {
        'kind': kind,
        'document': encode_document(value, emit_nulls=get_settings().emit_nulls)
    }


@app.post('/documents/{kind}/check')
def check_endpoint(kind: str, payload: Any = Body(...)) -> dict:
    check = CHECKS.get(kind)
    if check is None:
        raise HTTPException(status_code=404, detail=f'no consistency checks for kind {kind}')

    value = _decode(kind, payload)
    issues = check(value)
    if issues:
        logger.info('consistency issues kind=%s count=%s', kind, len(issues))
    return {'kind': kind, 'issues': [issue.to_dict() for issue in issues]}
