import os
import sys
import typer
from pathlib import Path
from churchdash.config import settings
from churchdash.logging import logger, get_run_id

app = typer.Typer(no_args_is_help=True)

@app.callback()
def main():
    """
    Church attendance dashboard CLI.
    """
    pass

@app.command(name="doctor")
def doctor():
    """
    Check system configuration and environment health.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Church Dashboard Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")
    print(f"  Run ID: {get_run_id()}")
    passed += 1

    # ── Check 2: Timezone ────────────────────────────────────────────────────
    print("\n[Configuration]")
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
    try:
        ZoneInfo(settings.SERVICE_TIMEZONE)
        print(f"  SERVICE_TIMEZONE:            ✅ {settings.SERVICE_TIMEZONE}")
        passed += 1
    except (ZoneInfoNotFoundError, ValueError):
        print(f"  SERVICE_TIMEZONE:            ❌ Unknown zone {settings.SERVICE_TIMEZONE!r}")
        failures.append(f"SERVICE_TIMEZONE {settings.SERVICE_TIMEZONE!r} is not a valid IANA zone")

    print(f"  ROSTER_CSV_URL:              {settings.ROSTER_CSV_URL}")
    print(f"  HTTP_TIMEOUT_SECONDS:        {settings.HTTP_TIMEOUT_SECONDS}")
    print(f"  ABSENCE_ALERT_THRESHOLD:     {settings.ABSENCE_ALERT_THRESHOLD}")
    if settings.BYPASS_ADMIN:
        print("  BYPASS_ADMIN:                ⚠️  Enabled (admin checks skipped)")

    # ── Check 3: Data directory ──────────────────────────────────────────────
    print("\n[Data Directory]")
    data_dir = Path(settings.data_dir)
    if data_dir.exists() and data_dir.is_dir():
        print(f"  {data_dir}/                        ✅ Found: {data_dir.absolute()}")
        passed += 1
    else:
        print(f"  {data_dir}/                        ❌ Missing: {data_dir.absolute()}")
        failures.append(f"{data_dir}/ directory not found — run `churchdash db init`")

    # ── Check 4: DB file / directory writability ─────────────────────────────
    print("\n[Database]")
    if not settings.database_url.startswith("sqlite"):
        print(f"  {settings.database_url.split('://')[0]}                   ⚠️  Skipped (not SQLite)")
    else:
        db_file = data_dir / "churchdash.db"
        if db_file.exists():
            if os.access(db_file, os.W_OK):
                print(f"  {db_file}        ✅ Exists and writable")
                passed += 1
            else:
                print(f"  {db_file}        ❌ Exists but NOT writable")
                failures.append(f"{db_file} exists but is not writable — check file permissions")
        elif data_dir.exists():
            if os.access(data_dir, os.W_OK):
                print(f"  {db_file}        ✅ Does not exist yet; directory is writable")
                passed += 1
            else:
                print(f"  {db_file}        ❌ Directory is not writable")
                failures.append(f"{data_dir}/ is not writable — db init cannot create the database")
        else:
            print(f"  {db_file}        ⚠️  Skipped (data directory missing)")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


db_app = typer.Typer(help="Database management commands.")
app.add_typer(db_app, name="db")

@db_app.command("init")
def init():
    """Initialize the database tables."""
    from churchdash.db import init_db
    try:
        init_db()
        logger.info("Database initialized successfully.")
        print("✅ Database initialized.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        print(f"❌ Failed: {e}")
        raise typer.Exit(code=1)


roster_app = typer.Typer(help="Roster spreadsheet commands.")
app.add_typer(roster_app, name="roster")

@roster_app.command("fetch")
def roster_fetch(url: str | None = typer.Option(None, help="Override ROSTER_CSV_URL")):
    """Fetch the roster and print the dashboard figures."""
    from churchdash.domain.exceptions import NetworkError
    from churchdash.domain.metrics import compute_metrics
    from churchdash.infra.roster.loader import RosterLoader
    try:
        members = RosterLoader(url=url).load()
    except NetworkError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=1)

    from datetime import datetime, timezone
    from churchdash.domain.service_date import local_now
    today = local_now(datetime.now(timezone.utc), settings.SERVICE_TIMEZONE).date()
    m = compute_metrics(members, today)
    print(f"Members:            {m.total_members}")
    print(f"Male / Female:      {m.gender.male} / {m.gender.female}")
    print(f"Active / New:       {m.active_members} / {m.new_members}")
    print(f"In groups:          {m.group_participants}")
    print(f"Own transport:      {m.with_transport}")
    print(f"Technology access:  {m.technology_access_rate:.0f}%")
    print("Age ranges:         " + ", ".join(f"{b.label}: {b.count}" for b in m.age_ranges))
    if m.upcoming_birthdays:
        print("Birthdays this week:")
        for b in m.upcoming_birthdays:
            print(f"  🎂 {b.name} — {b.weekday} {b.occurs_on.isoformat()}")


@app.command("service")
def service():
    """Show the service that a registration made now would target."""
    from churchdash.services.attendance_service import current_service
    info = current_service()
    print(f"{info.weekday.label} ({info.weekday.value}) {info.service_date_iso}")


attendance_app = typer.Typer(help="Attendance commands.")
app.add_typer(attendance_app, name="attendance")

@attendance_app.command("export")
def attendance_export(
    out: Path | None = typer.Option(None, help="Output file (default: attendance-<date>.csv)"),
):
    """Export the last RECENT_ATTENDANCE_DAYS of attendance as CSV."""
    from churchdash.infra.db.uow import UnitOfWork
    from churchdash.services.attendance_service import AttendanceService
    with UnitOfWork() as uow:
        filename, text = AttendanceService(uow).export_csv()
    if not text:
        print("No attendance recorded in the export window.")
        return
    target = out or Path(filename)
    target.write_text(text, encoding="utf-8")
    print(f"✅ Wrote {target}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
    reload: bool = typer.Option(False),
):
    """Run the API with uvicorn."""
    import uvicorn
    uvicorn.run("churchdash.api.app:create_app", factory=True, host=host, port=port, reload=reload)

if __name__ == "__main__":
    app()
