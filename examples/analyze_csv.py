"""Analyze a timing-beacon CSV export and print sessions, attempts and standings."""

import sys
from pathlib import Path

from racetiming import AnalysisConfig, analyze_race_data
from racetiming.formatters import (
    format_clock_time,
    format_consistency,
    format_race_time,
    format_status,
)


def main() -> None:
    if len(sys.argv) < 2:
        print(f"usage: {sys.argv[0]} EXPORT.csv [MAX_RACE_SECONDS]")
        sys.exit(1)

    text = Path(sys.argv[1]).read_text(encoding="utf-8")
    config = AnalysisConfig()
    if len(sys.argv) > 2:
        config = AnalysisConfig(max_reasonable_race_time=float(sys.argv[2]))

    result = analyze_race_data(text, config)
    sessions, attempts, summaries = result

    if not sessions:
        print("No valid reads found.")
        return

    for session in sessions:
        print(f"=== {session.name}: {session.contest_name} ===")
        first, last = session.records[0], session.records[-1]
        print(f"  {format_clock_time(first.utc_time)} -> {format_clock_time(last.utc_time)}"
              f" ({session.record_count} reads)")
        for a in result.attempts_for_session(session.id):
            print(f"  #{a.bib_number:<6} {format_race_time(a.duration):>9}  {format_status(a.status)}")

    # Standings: best completed time first, bibs without one last
    print(f"\n=== Standings ({len(attempts)} attempts) ===")
    for rank, s in enumerate(summaries, start=1):
        print(
            f"  {rank:>3}. #{s.bib_number:<6} best {format_race_time(s.best_time):>9}"
            f"  avg {format_race_time(s.average_time):>9}"
            f"  runs {s.completed_count}  DNF {s.dnf_count}"
            f"  consistency {format_consistency(s.consistency_score)}"
        )


if __name__ == "__main__":
    main()
