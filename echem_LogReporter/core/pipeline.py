# echem_LogReporter/core/pipeline.py
from __future__ import annotations
import logging
from pathlib import Path

from .axes import select_axes
from .classify import DEFAULT_RULES, MarkerRule, detect_mode, rules_from_config
from .metrics import mean, series_metrics
from .model import AnalysisContext, AnalysisResult, ChartSpec, Environment, TextRecord
from .plotting import ChartRenderer
from .reports import NO_DATA_MESSAGE, compose_report, write_report_text, write_series, write_summary
from .table import extract_table, split_lines, table_to_frame

_LOG = logging.getLogger(__name__)

def _opt_float(v, key: str) -> float | None:
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        print(f"[WARN] environment.{key}={v!r} is not a number; section omitted.")
        return None

def environment_from_config(cfg: dict | None) -> Environment:
    env = (cfg or {}).get("environment") or {}
    return Environment(
        temperature=_opt_float(env.get("temperature_C"), "temperature_C"),
        wavelength=_opt_float(env.get("wavelength_nm"), "wavelength_nm"),
        power=_opt_float(env.get("power_mW"), "power_mW"),
    )

def unique_run_labels(records: list[TextRecord]) -> list[str]:
    """Repeated stems (same file name in different folders) get _2, _3, ... suffixes."""
    taken: set[str] = {r.run for r in records}
    seen: set[str] = set()
    labels = []
    for rec in records:
        label = rec.run
        if label in seen:
            k = 2
            while f"{rec.run}_{k}" in taken or f"{rec.run}_{k}" in seen:
                k += 1
            label = f"{rec.run}_{k}"
            _LOG.info("run label '%s' repeats (%s); writing to '%s'", rec.run, rec.source_path, label)
        seen.add(label)
        labels.append(label)
    return labels

def analyze_text(text: str,
                 env: Environment | None = None,
                 rules: tuple[MarkerRule, ...] = DEFAULT_RULES,
                 source: str = "") -> AnalysisContext:
    """
    One complete, side-effect free run: classify, extract, select axes,
    average, compose. Everything lives on the returned context.
    """
    lines = split_lines(text)
    mode = detect_mode(lines, rules)
    header, table = extract_table(lines)
    _LOG.debug("%s: mode=%s header=%s rows=%d", source or "<text>", mode.value, header, len(table))

    if not table:
        return AnalysisContext(source=source, mode=mode, header=header, table=table,
                               result=None, report=NO_DATA_MESSAGE)

    sel = select_axes(header, table)
    if sel.n_dropped:
        _LOG.info("%s: %d row(s) too narrow for columns %d/%d, excluded",
                  source or "<text>", sel.n_dropped, sel.x_index, sel.y_index)
    if sel.y.size == 0:
        # every row was too narrow for the selected columns
        return AnalysisContext(source=source, mode=mode, header=header, table=table,
                               result=None, report=NO_DATA_MESSAGE)

    result = AnalysisResult(
        x=sel.x, y=sel.y,
        x_label=sel.x_label, y_label=sel.y_label,
        x_index=sel.x_index, y_index=sel.y_index,
        mean=mean(sel.y),
        n_dropped=sel.n_dropped,
    )
    report = compose_report(mode, table, result, env)
    return AnalysisContext(source=source, mode=mode, header=header, table=table,
                           result=result, report=report)

def chart_spec_for(ctx: AnalysisContext) -> ChartSpec | None:
    if ctx.result is None:
        return None
    r = ctx.result
    title = f"{ctx.source} — {ctx.mode.value}" if ctx.source else ctx.mode.value
    return ChartSpec(x=r.x, y=r.y, x_label=r.x_label, y_label=r.y_label, title=title)

def run_pipeline(records: list[TextRecord], cfg: dict, out_root: Path,
                 chart: ChartRenderer | None = None) -> list[AnalysisContext]:
    rules = rules_from_config(cfg)
    env = environment_from_config(cfg)
    rep_cfg = cfg.get("reports", {}) or {}
    fmt = str(rep_cfg.get("format", "csv")).lower()
    mat_var = str(rep_cfg.get("mat_variable", "series"))
    export_table = bool(rep_cfg.get("export_table", True))
    plot_cfg = cfg.get("plot", {}) or {}
    plot_enabled = bool(plot_cfg.get("enabled", True))
    dpi = int(plot_cfg.get("dpi", 160))
    own_chart = chart is None and plot_enabled
    if own_chart:
        chart = ChartRenderer(max_points=int(plot_cfg.get("max_points", 20000)))

    contexts: list[AnalysisContext] = []
    summary_rows: list[dict] = []
    for rec, run in zip(records, unique_run_labels(records)):
        ctx = analyze_text(rec.text, env=env, rules=rules, source=run)
        contexts.append(ctx)
        run_dir = out_root / run
        write_report_text(ctx.report, run_dir / "report.txt", f"{run} ({ctx.mode.value})")

        if ctx.result is None:
            print(f"[INFO] {run}: no numeric rows; chart and series skipped.")
            continue

        if export_table:
            frame = table_to_frame(ctx.header, ctx.table)
            frame.to_csv(run_dir / "table.csv", index=False, encoding="utf-8")
        write_series(ctx.result, run_dir / "series", f"{run} series", fmt=fmt, mat_variable=mat_var)

        spec = chart_spec_for(ctx)
        if chart is not None and spec is not None:
            chart.render(spec)
            chart.save(run_dir / "chart.png", dpi=dpi)

        row = series_metrics(ctx.result.x, ctx.result.y, run)
        row["mode"] = ctx.mode.value
        row["n_rows"] = len(ctx.table)
        summary_rows.append(row)

    if own_chart:
        chart.close()
    write_summary(summary_rows, out_root / "summary.csv")
    return contexts
