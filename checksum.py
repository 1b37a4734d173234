"""CredGate Checksum - 파일 경로 목록의 내용 기반 해시 계산"""
import os
import hashlib
import logging
from typing import Sequence

logger = logging.getLogger('credgate')


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _read_bytes(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except (PermissionError, OSError) as e:
        logger.warning(f"체크섬 계산용 파일 읽기 실패: {path} - {e}")
        return b''


def calculate_collective_hash(paths: Sequence[str], root: str = '.') -> str:
    """경로 목록 전체에 대한 집합 해시 (ignore 설정의 checksum 값)

    경로 순서대로 sha256(경로) + sha256(내용)을 이어붙인 뒤 다시 sha256을 계산한다.
    읽을 수 없는 파일은 빈 내용으로 취급한다.
    """
    collective = hashlib.sha256()
    for path in paths:
        content = _read_bytes(os.path.join(root, path))
        collective.update(_sha256_hex(path.encode('utf-8')).encode('ascii'))
        collective.update(_sha256_hex(content).encode('ascii'))
    return collective.hexdigest()
