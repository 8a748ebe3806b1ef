from datetime import datetime, timezone

from prefect.runtime import task_run


def parse_date(s: str | None) -> datetime | None:
    if not s or s.strip() == "":
        return None
    try:
        # Try parsing full ISO format with microseconds
        parsed = datetime.strptime(s, "%Y-%m-%dT%H:%M:%S.%fZ")
    except ValueError:
        try:
            # Fallback to ISO format without microseconds
            parsed = datetime.strptime(s, "%Y-%m-%dT%H:%M:%SZ")
        except ValueError:
            # Fallback to date-only
            parsed = datetime.strptime(s, "%Y-%m-%d")
    return parsed.replace(tzinfo=timezone.utc)


def from_unix(seconds: int | float | str | None) -> datetime | None:
    if seconds is None or seconds == "":
        return None
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc)


def seconds_between(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds())


def generate_task_run_name(step_name: str):
    def _generate_name():
        source = task_run.get_parameters()["source"]
        return f"{source.name} - {step_name}"

    return _generate_name
