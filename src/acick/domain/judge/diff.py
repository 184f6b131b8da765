"""Line-by-line comparison of expected and actual output."""

from itertools import zip_longest

from acick.domain.models import Compare


class TextDiff:
    """Two texts zipped line by line, with precomputed column widths."""

    def __init__(
        self,
        left_title: str,
        right_title: str,
        left: str,
        right: str,
        compare: Compare = Compare.DEFAULT,
    ):
        self.left_title = left_title
        self.right_title = right_title
        self.left = left
        self.right = right
        self.compare = compare

        self.rows = [
            (l_line, r_line, not compare.compare(l_line, r_line))
            for l_line, r_line in zip_longest(_lines(left), _lines(right), fillvalue="")
        ]
        self.l_width = max([len(left_title)] + [len(row[0]) for row in self.rows])
        self.r_width = max([len(right_title)] + [len(row[1]) for row in self.rows])
        self.any_mismatch = any(mismatch for _, _, mismatch in self.rows)

    def mismatched_lines(self) -> list[int]:
        """Zero-based indices of the rows that differ."""
        return [i for i, (_, _, mismatch) in enumerate(self.rows) if mismatch]

    def __str__(self) -> str:
        rule = f"  +-{'-' * self.l_width}-+-{'-' * self.r_width}-+"
        lines = [
            rule,
            f"  | {self.left_title:<{self.l_width}} | {self.right_title:<{self.r_width}} |",
            rule,
        ]
        for l_line, r_line, mismatch in self.rows:
            gutter = ">" if mismatch else " "
            lines.append(f"{gutter} | {l_line:<{self.l_width}} | {r_line:<{self.r_width}} |")
        lines.append(rule)
        return "\n".join(lines)


def _lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a final newline does not open another line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
