"""What-if analysis: sweep one input, or a grid of two, and compare outcomes."""

from copy import deepcopy
from dataclasses import dataclass
from typing import Mapping

import numpy as np

from propcalc.calculator import calculate_property_data
from propcalc.output import fmt, fmt_pct
from propcalc.params import PropertyData

METRICS = {
    "roi": "ROI (%)",
    "equity": "Equity",
    "net_cash_flow": "Net cash flow",
    "spent": "Total spent",
    "returns": "Returns",
}

PERCENT_PARAMS = ("capital_growth", "interest")


@dataclass
class SweepResult:
    param_value: float
    stamp_duty: float
    monthly_mortgage: float
    final_equity: float
    final_roi: float
    final_net_cash_flow: float


@dataclass
class MatrixResult:
    row_param: str
    row_values: list[float]
    col_param: str
    col_values: list[float]
    metric: str
    values: np.ndarray  # shape (len(row_values), len(col_values))

    def best(self) -> tuple[float, float, float]:
        """(row value, column value, metric) of the highest cell."""
        i, j = np.unravel_index(np.nanargmax(self.values), self.values.shape)
        return self.row_values[i], self.col_values[j], float(self.values[i, j])


def _base_input(base: Mapping | PropertyData | None) -> dict:
    if isinstance(base, PropertyData):
        return base.as_partial()
    return deepcopy(dict(base or {}))


def set_nested(data: dict, path: str, value: object) -> dict:
    """Return a copy of ``data`` with a dotted path like 'loan.interest' set."""
    result = deepcopy(data)
    parts = path.split(".")
    target = result
    for part in parts[:-1]:
        child = target.get(part)
        if child is None:
            child = target[part] = {}
        elif not isinstance(child, dict):
            raise ValueError(f"'{part}' in '{path}' is not a section")
        target = child
    target[parts[-1]] = value
    return result


def get_nested(data: PropertyData, path: str) -> object:
    """Read a dotted path like 'loan.interest' from a calculated scenario."""
    obj = data
    for part in path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ValueError(f"Unknown parameter '{path}'") from None
    return obj


def _final_metric(data: PropertyData, metric: str) -> float:
    final = data.final
    return getattr(final, metric) if final is not None else float("nan")


def sweep(
    base: Mapping | PropertyData | None,
    param_path: str,
    values: list[float],
) -> list[SweepResult]:
    """Recalculate the scenario for each value of one input."""
    base_input = _base_input(base)
    get_nested(calculate_property_data(base_input), param_path)

    results = []
    for val in values:
        data = calculate_property_data(set_nested(base_input, param_path, val))
        results.append(SweepResult(
            param_value=val,
            stamp_duty=data.stamp_duty,
            monthly_mortgage=data.loan.monthly_mortgage,
            final_equity=_final_metric(data, "equity"),
            final_roi=_final_metric(data, "roi"),
            final_net_cash_flow=_final_metric(data, "net_cash_flow"),
        ))
    return results


def what_if_matrix(
    base: Mapping | PropertyData | None,
    row_param: str,
    row_values: list[float],
    col_param: str,
    col_values: list[float],
    metric: str = "roi",
) -> MatrixResult:
    """Evaluate a final-year metric over a grid of two inputs."""
    if metric not in METRICS:
        raise ValueError(f"Unknown metric '{metric}'. Supported: {list(METRICS)}")
    base_input = _base_input(base)
    probe = calculate_property_data(base_input)
    get_nested(probe, row_param)
    get_nested(probe, col_param)

    grid = np.full((len(row_values), len(col_values)), np.nan)
    for i, row_val in enumerate(row_values):
        row_input = set_nested(base_input, row_param, row_val)
        for j, col_val in enumerate(col_values):
            data = calculate_property_data(set_nested(row_input, col_param, col_val))
            grid[i, j] = _final_metric(data, metric)

    return MatrixResult(
        row_param=row_param,
        row_values=list(row_values),
        col_param=col_param,
        col_values=list(col_values),
        metric=metric,
        values=grid,
    )


def _fmt_param(path: str, value: float) -> str:
    if path.split(".")[-1] in PERCENT_PARAMS:
        return f"{value:.2f}%"
    return f"{value:,.0f}"


def format_sweep(param_path: str, results: list[SweepResult]) -> str:
    """Format sweep results as a table."""
    label = param_path.split(".")[-1]
    header = (
        f"{'':>2} {label:>14} | {'Stamp Duty':>12} | {'Repayment':>10} | "
        f"{'Equity':>12} | {'Cash Flow':>10} | {'ROI':>8}"
    )
    sep = "-" * len(header)
    lines = [
        f"Sensitivity: {param_path} (final projected year)",
        header,
        sep,
    ]
    for r in results:
        lines.append(
            f"{'':>2} {_fmt_param(param_path, r.param_value):>14} | {fmt(r.stamp_duty):>12} | "
            f"{fmt(r.monthly_mortgage):>10} | {fmt(r.final_equity):>12} | "
            f"{fmt(r.final_net_cash_flow):>10} | {fmt_pct(r.final_roi):>8}"
        )
    return "\n".join(lines)


def format_matrix(result: MatrixResult) -> str:
    """Format a what-if grid with rows down the side and columns across."""
    cell = fmt_pct if result.metric == "roi" else fmt
    row_label = result.row_param.split(".")[-1]
    col_labels = [_fmt_param(result.col_param, v) for v in result.col_values]
    header = f"{row_label:>14} | " + " | ".join(f"{c:>10}" for c in col_labels)
    lines = [
        f"{METRICS[result.metric]}: {result.row_param} (rows) x {result.col_param} (columns)",
        header,
        "-" * len(header),
    ]
    for i, row_val in enumerate(result.row_values):
        cells = " | ".join(f"{cell(float(v)):>10}" for v in result.values[i])
        lines.append(f"{_fmt_param(result.row_param, row_val):>14} | {cells}")
    return "\n".join(lines)


def frange(start: float, stop: float, step: float) -> list[float]:
    """Floats from start to stop (inclusive) by step."""
    if step <= 0:
        raise ValueError("step must be positive")
    # half a step of slack so float error never drops the stop value
    values = np.arange(start, stop + step / 2, step)
    return [round(float(v), 6) for v in values]
