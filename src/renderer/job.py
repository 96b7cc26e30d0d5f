# renderer/job.py
from typing import List


class RenderJob:
    """
    A rectangle of pixels rendered as one unit of work: a half-open range of
    rows and a half-open range of columns.

    Row j maps to v = j / (height - 1), so row height-1 is the top of the
    picture.
    """
    __slots__ = ("rows", "columns")

    def __init__(self, rows: range, columns: range):
        self.rows = rows
        self.columns = columns

    def __eq__(self, other) -> bool:
        if not isinstance(other, RenderJob):
            return NotImplemented
        return self.rows == other.rows and self.columns == other.columns

    __hash__ = None

    def __getstate__(self):
        return (self.rows, self.columns)

    def __setstate__(self, state):
        self.rows, self.columns = state

    def pixel_count(self) -> int:
        return len(self.rows) * len(self.columns)

    def __repr__(self) -> str:
        return (f"RenderJob(rows={self.rows.start}..{self.rows.stop}, "
                f"columns={self.columns.start}..{self.columns.stop})")


def create_jobs(height: int, width: int, rows_per_job: int = 1) -> List[RenderJob]:
    """
    Splits an image into full-width row bands, topmost band first, which is
    the order a PPM file lists its pixels in.
    """
    if rows_per_job < 1:
        raise ValueError(f"rows_per_job must be at least 1, got {rows_per_job}")
    jobs = []
    bands = [range(start, min(start + rows_per_job, height))
             for start in range(0, height, rows_per_job)]
    for band in reversed(bands):
        jobs.append(RenderJob(band, range(0, width)))
    return jobs
