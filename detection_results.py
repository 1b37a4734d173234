"""CredGate DetectionResults - 탐지 실행 1회 동안의 실패/무시 결과 수집"""
import logging
import threading
from typing import List, Dict, Sequence, Optional, Tuple
from dataclasses import dataclass, field

logger = logging.getLogger('credgate')


@dataclass(frozen=True)
class FailureData:
    """탐지기 1회 호출이 남긴 실패 기록 (메시지 + 관련 커밋)"""
    messages: Tuple[str, ...]
    commits: Tuple[str, ...] = field(default_factory=tuple)


class DetectionResults:
    """탐지 실행 결과 수집기

    탐지기들이 fail/ignore로 결과를 누적하고, 리포트 단계에서 파일 경로별로 읽는다.
    기록은 추가만 가능하며 기존 기록을 덮어쓰지 않는다.
    병렬 탐지기(ThreadPoolExecutor)에서 직접 호출할 수 있도록 내부 lock으로 보호한다.
    """

    def __init__(self):
        self.failures: Dict[str, List[FailureData]] = {}
        self.ignores: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def fail(self, file_path: str, message: str, commits: Optional[Sequence[str]] = None) -> None:
        """파일을 실패로 기록. 같은 경로에 여러 번 호출하면 사유가 누적된다."""
        self.fail_many(file_path, [message], commits)

    def fail_many(self, file_path: str, messages: Sequence[str],
                  commits: Optional[Sequence[str]] = None) -> None:
        """한 번의 탐지기 호출에서 나온 여러 사유를 하나의 FailureData로 기록"""
        failure = FailureData(tuple(messages), tuple(commits or ()))
        with self._lock:
            self.failures.setdefault(file_path, []).append(failure)
            count = len(self.failures[file_path])
        logger.debug(f"실패 기록: {file_path} ({count}건)")

    def ignore(self, file_path: str, detector: str) -> None:
        """탐지기가 파일을 건너뛰었음을 기록"""
        with self._lock:
            self.ignores.setdefault(file_path, []).append(detector)
        logger.debug(f"무시 기록: {file_path} ({detector})")

    def has_failures(self) -> bool:
        with self._lock:
            return len(self.failures) > 0

    def has_ignores(self) -> bool:
        with self._lock:
            return len(self.ignores) > 0

    def successful(self) -> bool:
        """실패가 하나도 없으면 성공 (무시만 있는 실행도 성공)"""
        return not self.has_failures()

    def get_failures(self, file_path: str) -> List[FailureData]:
        with self._lock:
            return list(self.failures.get(file_path, []))

    def get_ignores(self, file_path: str) -> List[str]:
        with self._lock:
            return list(self.ignores.get(file_path, []))

    def failure_paths(self) -> List[str]:
        with self._lock:
            return list(self.failures)

    def ignore_paths(self) -> List[str]:
        with self._lock:
            return list(self.ignores)
