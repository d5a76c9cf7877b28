"""Application export – plain-text performance report."""
from __future__ import annotations

from logscope.application.analytics.dto import DashboardResult
from logscope.domain.classifier import friendly_duration
from logscope.kernel.time import format_timestamp

__all__ = ["render_performance_report"]


def render_performance_report(dashboard: DashboardResult) -> str:
    stats = dashboard.statistics
    perf = dashboard.performance
    window = "all time"
    if dashboard.from_date is not None and dashboard.to_date is not None:
        window = f"{format_timestamp(dashboard.from_date)} - {format_timestamp(dashboard.to_date)}"

    lines = [
        "Performance Report",
        "==================",
        f"Generated:           {format_timestamp(dashboard.generated_at)}",
        f"Window:              {window}",
        "",
        f"Total logs:          {stats.total_logs}",
        f"Total requests:      {stats.total_requests}",
        f"Errors:              {stats.error_count}",
        f"Warnings:            {stats.warning_count}",
        f"Error rate:          {stats.error_rate:.2f}%",
        f"Success rate:        {stats.success_rate:.2f}%",
        f"Avg response time:   {stats.avg_response_time:.2f} ms",
        f"Slow requests:       {stats.slow_request_count}",
        "",
        f"Health status:       {perf.health_status}",
        f"Requests per minute: {perf.requests_per_minute}",
        f"Throughput:          {perf.throughput:.2f} req/min",
        f"Median:              {friendly_duration(perf.median_response_time)}",
        f"P95:                 {friendly_duration(perf.p95_response_time)}",
        f"P99:                 {friendly_duration(perf.p99_response_time)}",
    ]

    if dashboard.slow_requests:
        lines += ["", "Slowest requests", "----------------"]
        for slow in dashboard.slow_requests:
            lines.append(
                f"{slow.http_method or '-':<7} {slow.request_path or '-'} "
                f"{friendly_duration(slow.duration)} ({slow.performance_level})"
            )

    if dashboard.top_errors:
        lines += ["", "Top errors", "----------"]
        for error in dashboard.top_errors:
            lines.append(f"{error.count:>5}  {error.error_message}")

    return "\n".join(lines) + "\n"
