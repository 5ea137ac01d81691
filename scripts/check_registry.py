#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from apps.registry.codec import DOCUMENT_KINDS, decode_document, encode_document
from apps.registry.config import get_settings
from apps.registry.consistency import Issue, check_asset, check_asset_list, check_chain
from apps.registry.errors import DecodeError

LOGGER = logging.getLogger('registry.check')


class RegistryFetchError(RuntimeError):
    pass


def _is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


def resolve_source(source: str, *, remote: bool, base_url: str) -> str:
    if _is_url(source) or not remote:
        return source
    return f"{base_url}/{source.lstrip('/')}"


def http_get(url: str, timeout: int) -> Any:
    req = urllib.request.Request(url=url, method='GET', headers={'Accept': 'application/json'})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode('utf-8'))
    except (urllib.error.URLError, TimeoutError) as exc:
        raise RegistryFetchError(f'fetch failed url={url}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise RegistryFetchError(f'invalid json from url={url}: {exc}') from exc


def read_document(source: str, timeout: int) -> Any:
    if _is_url(source):
        return http_get(source, timeout)
    path = Path(source)
    try:
        return json.loads(path.read_text(encoding='utf-8'))
    except OSError as exc:
        raise RegistryFetchError(f'cannot read {path}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise RegistryFetchError(f'invalid json in {path}: {exc}') from exc


def _issues_for(kind: str, value: Any, chains: Any) -> list[Issue]:
    if kind == 'asset':
        return check_asset(value)
    if kind == 'assetlist':
        return check_asset_list(value, chains)
    if kind == 'chain':
        return check_chain(value)
    if kind == 'chainlist':
        return [issue for chain in value for issue in check_chain(chain)]
    return []


def run(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='Decode and check a registry document')
    parser.add_argument('source', help='Path or http(s) URL of the document')
    parser.add_argument('--kind', required=True, choices=sorted(DOCUMENT_KINDS), help='Document kind')
    parser.add_argument('--remote', action='store_true', help='Resolve relative sources against REGISTRY_BASE_URL')
    parser.add_argument('--chains', help='Chain list document used for cross-chain checks of an assetlist')
    parser.add_argument('--canonical', action='store_true', help='Print the canonical encoding')
    parser.add_argument('--strict', action='store_true', help='Exit with status 2 when consistency issues are found')
    args = parser.parse_args(argv)

    settings = get_settings()
    source = resolve_source(args.source, remote=args.remote, base_url=settings.registry_base_url)

    try:
        raw = read_document(source, settings.http_timeout_seconds)
        chains_raw = None
        if args.chains:
            chains_source = resolve_source(args.chains, remote=args.remote, base_url=settings.registry_base_url)
            chains_raw = read_document(chains_source, settings.http_timeout_seconds)
    except RegistryFetchError as exc:
        LOGGER.error('%s', exc)
        return 1

    try:
        value = decode_document(args.kind, raw)
        chains = decode_document('chainlist', chains_raw) if chains_raw is not None else None
    except DecodeError as exc:
        LOGGER.error('decode failed source=%s error=%s', source, json.dumps(exc.to_dict()))
        return 1

    LOGGER.info('decoded source=%s kind=%s', source, args.kind)

    issues = _issues_for(args.kind, value, chains)
    for issue in issues:
        LOGGER.warning('%s: %s', issue.subject, issue.message)

    if args.canonical:
        print(json.dumps(encode_document(value, emit_nulls=settings.emit_nulls), indent=2, ensure_ascii=False))

    if issues and args.strict:
        return 2
    return 0


def main() -> None:
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    sys.exit(run())


if __name__ == '__main__':
    main()
