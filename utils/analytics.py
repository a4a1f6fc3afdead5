"""
Minimal usage analytics for the toolbox MCP server.
Simple JSON-lines log to see which tools get used and how often they fail.
"""
import json
from datetime import datetime

from core import config

# Track last tool for retry detection
_last_tool = None

ALL_TOOLS = {
    "list_devices", "device_info", "adb_shell", "package", "file_transfer",
    "reboot", "network", "sideload", "fastboot", "logcat", "screen",
    "payload", "workspace",
}


def _ensure_dir():
    """Create analytics directory if needed."""
    config.ANALYTICS_DIR.mkdir(parents=True, exist_ok=True)


def log_event(tool: str, ok: bool, action: str = None, placeholder: bool = False):
    """
    Log a tool usage event.

    Args:
        tool: Tool name (e.g., "adb_shell", "payload")
        ok: Whether the tool succeeded
        action: Sub-action for consolidated tools (e.g., "flash")
        placeholder: Whether placeholder data was returned instead of real output
    """
    global _last_tool

    key = f"{tool}:{action}" if action else tool
    try:
        _ensure_dir()

        event = {
            "ts": datetime.now().isoformat(timespec="seconds"),
            "tool": tool,
            "action": action,
            "ok": ok,
            "placeholder": placeholder,
            "retry": key == _last_tool,
        }

        with open(config.ANALYTICS_FILE, "a") as f:
            f.write(json.dumps(event) + "\n")

        _last_tool = key
    except OSError:
        pass  # Never fail the tool call due to analytics


def get_summary() -> dict:
    """
    Get usage summary.

    Returns dict with:
    - tool_counts: {tool_name: count}
    - success_rate, retry_rate, placeholder_rate: percentages
    - insights: list of short observations
    """
    if not config.ANALYTICS_FILE.exists():
        return {"error": "No analytics data yet"}

    events = []
    with open(config.ANALYTICS_FILE) as f:
        for line in f:
            if line.strip():
                events.append(json.loads(line))

    if not events:
        return {"error": "No events recorded"}

    total = len(events)
    tool_counts = {}
    successes = 0
    retries = 0
    placeholders = 0

    for e in events:
        tool = e.get("tool", "unknown")
        tool_counts[tool] = tool_counts.get(tool, 0) + 1

        if e.get("ok"):
            successes += 1
        if e.get("retry"):
            retries += 1
        if e.get("placeholder"):
            placeholders += 1

    return {
        "total_events": total,
        "tool_counts": tool_counts,
        "success_rate": round(successes / total * 100, 1),
        "retry_rate": round(retries / total * 100, 1),
        "placeholder_rate": round(placeholders / total * 100, 1),
        "insights": _generate_insights(tool_counts, retries / total, placeholders),
    }


def _generate_insights(tool_counts: dict, retry_rate: float, placeholders: int) -> list:
    insights = []

    if retry_rate > 0.15:
        insights.append(f"High retry rate ({retry_rate*100:.0f}%): check error messages.")

    if placeholders:
        insights.append(f"{placeholders} payload listing(s) returned placeholder data: install payload-dumper-go.")

    unused = ALL_TOOLS - set(tool_counts.keys())
    if unused:
        insights.append(f"Unused tools: {', '.join(sorted(unused))}")

    if not insights:
        insights.append("No obvious issues detected.")

    return insights


def clear_analytics():
    """Clear all analytics data."""
    if config.ANALYTICS_FILE.exists():
        config.ANALYTICS_FILE.unlink()
    return "Analytics cleared."
