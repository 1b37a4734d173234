"""CredGate ignore 설정 제안 - 실패/무시된 파일로 .credgaterc 붙여넣기용 YAML 생성"""
import logging
from typing import Callable, List, Dict, Sequence
from dataclasses import dataclass, field

import yaml

logger = logging.getLogger('credgate')

ChecksumFunc = Callable[[Sequence[str]], str]


class CredGateError(Exception):
    """CredGate 기본 예외"""


class SuggestionError(CredGateError):
    """ignore 설정 제안 직렬화 실패"""


@dataclass
class FileIgnoreConfig:
    filename: str
    checksum: str
    allowed_patterns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'filename': self.filename,
            'checksum': self.checksum,
            'allowed_patterns': list(self.allowed_patterns),
        }


def build_ignore_configs(file_paths: Sequence[str], checksum: ChecksumFunc) -> List[FileIgnoreConfig]:
    """경로마다 단일 경로 목록으로 체크섬을 계산해 ignore 레코드 생성"""
    configs = []
    for file_path in file_paths:
        configs.append(FileIgnoreConfig(file_path, checksum([file_path])))
    return configs


def suggest_ignore_config(file_paths: Sequence[str], checksum: ChecksumFunc) -> str:
    """ignore 설정 파일에 그대로 붙여넣을 수 있는 YAML 블록 반환

    체크섬 함수의 예외는 그대로 전파되고, YAML 직렬화 실패는 SuggestionError로 올린다.
    """
    configs = build_ignore_configs(file_paths, checksum)
    document = {'fileignoreconfig': [c.to_dict() for c in configs]}
    try:
        text = yaml.safe_dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except yaml.YAMLError as e:
        logger.error(f"ignore 설정 제안 직렬화 실패: {e}")
        raise SuggestionError(f"ignore 설정 제안을 만들 수 없습니다: {e}") from e
    logger.debug(f"ignore 설정 제안 생성: {len(configs)}개 파일")
    return text
