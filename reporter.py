"""CredGate Reporter - 탐지 결과 표 출력 및 ignore 설정 제안"""
import io
import copy
import logging
from typing import List, Tuple, Dict, Optional
from dataclasses import dataclass, field

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from checksum import calculate_collective_hash
from config import DEFAULT_CONFIG, load_config, validate_config
from detection_results import DetectionResults
from ignore_suggestion import ChecksumFunc, suggest_ignore_config

logger = logging.getLogger('credgate')

MESSAGE_WIDTH = 150
BANNER = "CredGate Report:"
IGNORE_NOTE = ("위 파일들을 credgate 탐지에서 제외해도 확실히 안전하다면, "
               "아래 형식을 프로젝트 루트의 {ignore_file} 파일에 붙여넣으세요")


def truncate_message(message: str, width: int = MESSAGE_WIDTH) -> str:
    """width를 넘는 메시지는 width 위치에서 한 번 줄바꿈 (단어 경계 무시)

    바이트가 아니라 문자 단위로 자른다. 한글 등 멀티바이트 메시지도 width 글자 뒤에서 나뉜다.
    """
    if len(message) > width:
        return message[:width] + "\n" + message[width:]
    return message


@dataclass
class ReportRow:
    file_path: str
    message: str
    commits: str = ''

    def cells(self, with_commits: bool = False) -> Tuple[str, ...]:
        if with_commits:
            return self.file_path, self.message, self.commits
        return self.file_path, self.message


@dataclass
class ReportModel:
    """출력 전 리포트 데이터 (표 행 + ignore 설정 제안)"""
    headers: Tuple[str, ...]
    rows: List[ReportRow] = field(default_factory=list)
    paths: List[str] = field(default_factory=list)
    suggestion: str = ''
    failed: bool = False
    to_be_scanned: bool = False


class Reporter:
    """DetectionResults를 읽어 실패 표와 ignore 설정 제안을 만든다"""

    def __init__(self, results: DetectionResults, checksum: Optional[ChecksumFunc] = None,
                 console: Optional[Console] = None, config: Optional[Dict] = None):
        self.results = results
        self.checksum = checksum or calculate_collective_hash
        self.config = validate_config(copy.deepcopy(config if config is not None else DEFAULT_CONFIG))
        report_config = self.config['report']
        self.message_width = report_config['message_width']
        self.sort_paths = report_config['sort_paths']
        self.console_width = report_config['console_width']
        self.color = report_config['color']
        self.ignore_file = self.config['ignore_file']
        # 주입된 console은 자체 터미널/색상 설정을 따른다. color가 false면 스타일을 적용하지 않는다.
        self.console = console or Console(width=self.console_width, highlight=False, force_terminal=self.color,
                                          no_color=not self.color,
                                          color_system="standard" if self.color else None)

    @classmethod
    def from_config(cls, results: DetectionResults, config_path: Optional[str] = None, **kwargs) -> 'Reporter':
        """config.yaml (+ config.local.yaml) 설정으로 Reporter 생성"""
        return cls(results, config=load_config(config_path), **kwargs)

    def collect_paths(self) -> List[str]:
        """실패 또는 무시된 파일 경로 (중복 제거)"""
        paths = list(dict.fromkeys(self.results.failure_paths() + self.results.ignore_paths()))
        if self.sort_paths:
            paths.sort()
        return paths

    def report_file_failures(self, file_path: str, to_be_scanned: bool = False) -> List[ReportRow]:
        """파일의 FailureData마다 메시지 1개당 1행 생성"""
        rows = []
        for failure in self.results.get_failures(file_path):
            commits = "\n".join(failure.commits) if to_be_scanned else ''
            for message in failure.messages:
                rows.append(ReportRow(file_path, truncate_message(message, self.message_width), commits))
        return rows

    def build_report(self, to_be_scanned: bool = False) -> ReportModel:
        headers = ("File", "Errors", "Commits") if to_be_scanned else ("File", "Errors")
        model = ReportModel(headers=headers, to_be_scanned=to_be_scanned)
        model.paths = self.collect_paths()
        model.failed = self.results.has_failures()
        for file_path in model.paths:
            model.rows.extend(self.report_file_failures(file_path, to_be_scanned))
        if model.failed:
            model.suggestion = suggest_ignore_config(model.paths, self.checksum)
        logger.debug(f"리포트 생성: {len(model.rows)}행, {len(model.paths)}개 파일")
        return model

    def _build_table(self, model: ReportModel) -> Table:
        table = Table(box=box.SQUARE, show_lines=True, header_style="bold" if self.color else "")
        table.add_column(model.headers[0], overflow="fold")
        # 메시지 칸은 truncate_message가 넣은 줄바꿈 외에 다시 줄바꿈하지 않는다
        for header in model.headers[1:]:
            table.add_column(header, no_wrap=True)
        for row in model.rows:
            # 메시지에 포함된 [..]가 rich 마크업으로 해석되지 않도록 Text 사용
            table.add_row(*[Text(cell) for cell in row.cells(model.to_be_scanned)])
        return table

    def _render_plain(self, renderable, color: bool = False) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=self.console_width, force_terminal=color, no_color=not color,
                          color_system="standard" if color else None, highlight=False)
        console.print(renderable, end='', soft_wrap=isinstance(renderable, Text))
        return buffer.getvalue()

    def render_table(self, model: ReportModel) -> str:
        return self._render_plain(self._build_table(model))

    def render(self, model: ReportModel) -> str:
        """반환용 텍스트: 안내 문구 + ignore 설정 제안 (표는 포함하지 않음)"""
        if not model.failed:
            return ''
        note = Text(IGNORE_NOTE.format(ignore_file=self.ignore_file), style="yellow")
        return "\n" + self._render_plain(note, color=self.color) + "\n" + model.suggestion + "\n\n"

    def report(self, to_be_scanned: bool = False) -> str:
        """실행 종료 시 1회 호출. 표는 콘솔에 출력하고 ignore 설정 제안을 반환한다."""
        model = self.build_report(to_be_scanned)
        if not model.failed:
            return ''
        self.console.print()
        self.console.print(Text(BANNER, style="bold red" if self.color else ""))
        self.console.print(self._build_table(model))
        return self.render(model)
