"""Logging utilities for Signcraft."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

_HANDLER_MARK = "_signcraft_handler"


@dataclass
class GenerationStats:
    """Statistics from one generation run."""

    line_count: int = 0
    region_count: int = 0
    hole_count: int = 0
    orphan_hole_count: int = 0
    fallback_count: int = 0
    bevel_collapse_count: int = 0
    triangle_count: int = 0
    vertex_count: int = 0
    open_edge_count: int = 0
    output_path: Path | None = None
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate generation duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def is_degraded(self) -> bool:
        """Whether any stage fell back to approximate geometry."""
        return (
            self.fallback_count > 0
            or self.orphan_hole_count > 0
            or self.open_edge_count > 0
        )


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls replace the handlers of the previous call
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARK, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_MARK, True)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("signcraft")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class GenerationLogger:
    """Logger for tracking generation progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("signcraft")
        self._stats = GenerationStats()

    def log_line(self, text: str, contours: int) -> None:
        """Log a laid out line."""
        self._logger.debug("Line extracted", line=text, contours=contours)
        self._stats.line_count += 1

    def log_classification(self, outers: int, holes: int, orphans: int) -> None:
        """Log contour classification results."""
        self._logger.debug("Contours classified", outer=outers, holes=holes, orphans=orphans)
        self._stats.region_count += outers
        self._stats.hole_count += holes
        self._stats.orphan_hole_count += orphans

    def log_region(self, triangles: int, fallbacks: int, bevel_collapsed: bool) -> None:
        """Log an extruded region."""
        self._logger.debug(
            "Region extruded",
            triangles=triangles,
            fallbacks=fallbacks,
            bevel_collapsed=bevel_collapsed,
        )
        self._stats.fallback_count += fallbacks
        if bevel_collapsed:
            self._stats.bevel_collapse_count += 1

    def log_mesh(self, triangles: int, vertices: int, open_edges: int) -> None:
        """Log the assembled mesh."""
        self._stats.triangle_count = triangles
        self._stats.vertex_count = vertices
        self._stats.open_edge_count = open_edges
        if open_edges:
            self._logger.warning("Mesh is not watertight", open_edges=open_edges)
        else:
            self._logger.debug("Mesh assembled", triangles=triangles, vertices=vertices)

    @property
    def stats(self) -> GenerationStats:
        """Get current generation statistics."""
        return self._stats
