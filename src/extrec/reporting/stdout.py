"""Human-readable stdout reporter for evaluation results."""

from __future__ import annotations

from extrec.constants.branding import ASCII_LOGO_LINES, RESULT_TITLE
from extrec.constants.reporting import (
    ACTIVE_MARKER,
    ANSI_BOLD,
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RESET,
    ANSI_YELLOW,
    EMPTY_BUNDLE_TEXT,
)
from extrec.model import Bundle, EvaluationResult, Plugin, StoreStateSnapshot


def _colorize(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{ANSI_RESET}" if enabled else text


class StdoutReporter:
    """Formats evaluation results as plain terminal output."""

    def __init__(
        self,
        result: EvaluationResult,
        snapshot: StoreStateSnapshot | None = None,
        *,
        color: bool = True,
        verbose: bool = False,
    ) -> None:
        self._result = result
        self._snapshot = snapshot
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        lines: list[str] = [*ASCII_LOGO_LINES, ""]
        lines.append(_colorize(RESULT_TITLE, ANSI_BOLD, self._color))
        if self._verbose and self._snapshot is not None:
            lines.extend(self._snapshot_lines())

        for bundle in self._result.bundles:
            lines.append("")
            lines.extend(self._bundle_lines(bundle))

        lines.append("")
        lines.append(
            f"{len(self._result.bundles)} bundle(s), {self._result.total_plugins} recommended plugin(s)"
        )
        return "\n".join(lines)

    def _bundle_lines(self, bundle: Bundle) -> list[str]:
        header = f"{bundle.title} [{bundle.key}]" if bundle.title else bundle.key
        lines = [_colorize(header, ANSI_BOLD, self._color)]
        if not bundle.plugins:
            lines.append(f"  {_colorize(EMPTY_BUNDLE_TEXT, ANSI_DIM, self._color)}")
            return lines
        for plugin in bundle.plugins:
            lines.append(f"  - {self._plugin_label(plugin)}")
            if self._verbose and plugin.description:
                lines.append(f"      {plugin.description}")
        return lines

    def _plugin_label(self, plugin: Plugin) -> str:
        label = _colorize(plugin.key, ANSI_GREEN, self._color)
        if plugin.name:
            label = f"{label}  {plugin.name}"
        if self._snapshot is not None and self._snapshot.is_plugin_active(plugin.package_slug):
            label = f"{label} {_colorize(ACTIVE_MARKER, ANSI_YELLOW, self._color)}"
        return label

    def _snapshot_lines(self) -> list[str]:
        snapshot = self._snapshot
        assert snapshot is not None
        country = snapshot.default_country or "unknown"
        if snapshot.active_plugins is None:
            active = "unknown"
        else:
            active = ", ".join(sorted(snapshot.active_plugin_slugs or ())) or "none"
        return [f"  store location: {country}", f"  active plugins: {active}"]
