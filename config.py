"""CredGate 설정 로드 (config.yaml + config.local.yaml)"""
import sys
import copy
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger('credgate')

DEFAULT_CONFIG: Dict[str, Any] = {
    'report': {
        'message_width': 150,
        'sort_paths': True,
        'console_width': 200,
        'color': True,
    },
    'ignore_file': '.credgaterc',
}


def _read_yaml(path: str) -> Dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except (yaml.YAMLError, IOError) as e:
        logger.error(f"설정 파일 로드 실패: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"설정 파일 형식이 올바르지 않습니다: {path}")
        return {}
    return data


def merge_config(config: Dict, local: Dict) -> Dict:
    """로컬 설정을 병합 (리스트는 추가, 딕셔너리는 갱신, 값은 덮어쓰기)"""
    for key, value in local.items():
        if isinstance(value, list) and isinstance(config.get(key), list):
            config[key] = config[key] + value
        elif isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    return config


def validate_config(config: Dict) -> Dict:
    """설정값 검증 - 잘못된 값은 기본값으로 대체"""
    defaults = DEFAULT_CONFIG['report']
    report = config.get('report')
    if not isinstance(report, dict):
        if report is not None:
            logger.warning(f"잘못된 report 설정: {report} → 기본값 사용")
        report = config['report'] = dict(defaults)

    width = report.get('message_width', defaults['message_width'])
    if not isinstance(width, int) or isinstance(width, bool) or width <= 0 or width > 10000:
        logger.warning(f"잘못된 message_width: {width} → 기본값 {defaults['message_width']} 사용")
        report['message_width'] = defaults['message_width']

    console_width = report.get('console_width', defaults['console_width'])
    if not isinstance(console_width, int) or isinstance(console_width, bool) or console_width < 40:
        logger.warning(f"잘못된 console_width: {console_width} → 기본값 {defaults['console_width']} 사용")
        report['console_width'] = defaults['console_width']

    for key in ('sort_paths', 'color'):
        if not isinstance(report.get(key, defaults[key]), bool):
            logger.warning(f"잘못된 {key}: {report.get(key)} → 기본값 {defaults[key]} 사용")
            report[key] = defaults[key]

    for key, value in defaults.items():
        report.setdefault(key, value)

    ignore_file = config.get('ignore_file')
    if not isinstance(ignore_file, str) or not ignore_file:
        if ignore_file is not None:
            logger.warning(f"잘못된 ignore_file: {ignore_file} → 기본값 사용")
        config['ignore_file'] = DEFAULT_CONFIG['ignore_file']
    return config


def find_config_file(filename: str = 'config.yaml') -> str:
    """config.yaml 경로 탐색"""
    candidates = [
        Path('.') / filename,                        # 현재 디렉토리
        Path(__file__).parent / filename,           # 같은 디렉토리
        Path(sys.prefix) / 'credgate' / filename,   # pip install 경로
    ]
    for p in candidates:
        if p.exists():
            return str(p)
    return filename


def load_config(config_path: Optional[str] = None) -> Dict:
    """기본값 위에 config.yaml, config.local.yaml 순서로 병합"""
    config_path = config_path or find_config_file()
    config = copy.deepcopy(DEFAULT_CONFIG)
    merge_config(config, _read_yaml(config_path))
    local_config_path = config_path.replace('.yaml', '.local.yaml')
    if local_config_path != config_path:
        local_config = _read_yaml(local_config_path)
        if local_config:
            merge_config(config, local_config)
    return validate_config(config)
