"""
Line statistics over a generated source tree.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class CodeStatistics:
    """Counts for the generated files of one extension."""

    file_count: int = 0
    code_lines: int = 0  # total lines, blank and comment lines included
    blank_lines: int = 0
    comment_lines: int = 0
    source_lines: int = 0

    def add(self, other: "CodeStatistics"):
        self.file_count += other.file_count
        self.code_lines += other.code_lines
        self.blank_lines += other.blank_lines
        self.comment_lines += other.comment_lines
        self.source_lines += other.source_lines

    def to_dict(self) -> Dict[str, int]:
        return {
            "fileCount": self.file_count,
            "codeLines": self.code_lines,
            "blankLines": self.blank_lines,
            "commentLines": self.comment_lines,
            "sourceLines": self.source_lines,
        }


def classify_lines(lines: Iterable[str]) -> CodeStatistics:
    """
    Classify Java source lines as blank, comment or source.

    A line that opens a ``/* ... */`` block counts as a comment, as does
    every line up to the one that closes it.

    Args:
        lines: Lines of one file

    Returns:
        CodeStatistics with file_count left at zero
    """
    stats = CodeStatistics()
    in_block = False

    for line in lines:
        stats.code_lines += 1
        stripped = line.strip()

        if in_block:
            stats.comment_lines += 1
            if "*/" in stripped:
                in_block = False
        elif not stripped:
            stats.blank_lines += 1
        elif stripped.startswith("//"):
            stats.comment_lines += 1
        elif stripped.startswith("/*"):
            stats.comment_lines += 1
            in_block = "*/" not in stripped[2:]
        else:
            stats.source_lines += 1

    return stats


def collect_statistics(
    output_dir: Union[str, Path], extension: str = ".java", encoding: str = "gbk"
) -> CodeStatistics:
    """
    Count files with the given extension under a directory and their lines.

    Lines are split on newline characters, so a file ending in a newline
    counts one final empty line.

    Args:
        output_dir: Directory to scan recursively
        extension: File suffix to include, e.g. ``.java``
        encoding: Encoding the files were written in

    Returns:
        Aggregated CodeStatistics; zeros when the directory is missing
    """
    root = Path(output_dir)
    total = CodeStatistics()

    if not root.is_dir():
        logger.debug("Statistics skipped, %s does not exist", root)
        return total

    for path in sorted(root.rglob(f"*{extension}")):
        if not path.is_file():
            continue
        with path.open("r", encoding=encoding, errors="replace") as f:
            file_stats = classify_lines(f.read().split("\n"))
        file_stats.file_count = 1
        total.add(file_stats)

    logger.info("%d file(s), %d line(s) under %s", total.file_count, total.code_lines, root)
    return total
