"""fswin – CLI-Einstiegspunkt.

Listet Laufwerke, zeigt Kapazität einzelner Laufwerke und ermittelt Details
(Größe, Anzahl Dateien/Ordner, Besitzer) für Dateien und Ordner. Optional wird
ein JSON-Report geschrieben.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from tqdm import tqdm

from .config import load_config
from .details import get_file_or_folder_details
from .drives import get_drive_details, list_accessible_drives, normalize_drive
from .models import DriveInfo, FileSystemEntryDetails
from .paths import ensure_dirs, setup_logging
from .report import generate_report, save_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fswin",
        description="Zeigt Laufwerke, Kapazitäten und Datei-/Ordnerdetails unter Windows.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Pfad für einen JSON-Report (optional)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    drives = sub.add_parser("drives", help="Erreichbare Laufwerke auflisten")
    drives.add_argument("--details", action="store_true", help="Kapazität je Laufwerk abfragen")

    drive = sub.add_parser("drive", help="Kapazität eines Laufwerks anzeigen")
    drive.add_argument("letter", help="Laufwerksbuchstabe, z.B. C")

    details = sub.add_parser("details", help="Details zu Dateien/Ordnern")
    details.add_argument("paths", nargs="+", help="Ein oder mehrere Pfade")
    details.add_argument(
        "--timeout", type=float, default=None,
        help="Ordneranalyse nach N Sekunden abbrechen (Teilergebnis)",
    )
    return parser


async def collect_details(
    paths: list[str],
    config: dict,
    timeout: float | None = None,
    progress: bool = True,
) -> list[FileSystemEntryDetails | None]:
    """Ermittelt Details für mehrere Pfade parallel, Reihenfolge wie ``paths``."""
    results: list[FileSystemEntryDetails | None] = [None] * len(paths)

    async def one(index: int, path: str) -> None:
        results[index] = await get_file_or_folder_details(
            path,
            max_workers=config["max_workers"],
            follow_symlinks=config["follow_symlinks"],
            timeout=timeout,
            powershell_timeout=config["powershell_timeout"],
        )

    with tqdm(total=len(paths), desc="Analysiere Pfade", unit="Pfad", disable=not progress) as bar:
        for fut in asyncio.as_completed([one(i, p) for i, p in enumerate(paths)]):
            await fut
            bar.update(1)
    return results


async def collect_drives(config: dict, with_details: bool) -> tuple[list[str], list[DriveInfo | None]]:
    letters = await list_accessible_drives(
        probe_concurrency=config["probe_concurrency"],
        powershell_timeout=config["powershell_timeout"],
    )
    if not with_details:
        return letters, []
    infos = await asyncio.gather(
        *(get_drive_details(letter, powershell_timeout=config["powershell_timeout"]) for letter in letters)
    )
    return letters, list(infos)


def _print_details(details: FileSystemEntryDetails) -> None:
    print(f"\n{details.path}")
    print(f"  Typ:            {'Ordner' if details.is_folder else 'Datei'}")
    print(f"  Besitzer:       {details.owner}")
    print(f"  Geändert:       {details.last_modified.isoformat(timespec='seconds')}")
    if details.is_file:
        print(f"  Größe:          {details.size_formatted}")
    if details.aggregate is not None:
        print(f"  Gesamtgröße:    {details.total_size_formatted}")
        print(f"  Dateien:        {details.contains_files_count}")
        print(f"  Ordner:         {details.contains_folders_count}")
        if not details.aggregate.complete:
            print("  (abgebrochen – Teilergebnis)")


def _print_drive(info: DriveInfo) -> None:
    print(
        f"  {info.drive}:  {info.volume_name:<20} "
        f"{info.used_space:>10} belegt / {info.total_space:>10} ({info.free_space} frei)"
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    config = load_config()
    setup_logging(config["log_level"])
    ensure_dirs()

    entries: list[dict] = []
    requested: list[str] = []

    if args.command == "drives":
        letters, infos = asyncio.run(collect_drives(config, args.details))
        requested = letters
        if not letters:
            print("Keine Laufwerke gefunden.", file=sys.stderr)
            return 1
        print(f"Laufwerke: {', '.join(letters)}")
        if args.details:
            for letter, info in zip(letters, infos):
                if info is None:
                    print(f"  {letter}:  (keine Daten)")
                else:
                    _print_drive(info)
            entries = [info.to_dict() for info in infos if info is not None]
        else:
            entries = [{"drive": letter} for letter in letters]

    elif args.command == "drive":
        if normalize_drive(args.letter) is None:
            print(f"Fehler: Ungültiger Laufwerksbuchstabe: {args.letter}", file=sys.stderr)
            return 1
        requested = [args.letter]
        info = asyncio.run(get_drive_details(args.letter, powershell_timeout=config["powershell_timeout"]))
        if info is None:
            print(f"Fehler: Keine Daten für Laufwerk {args.letter}", file=sys.stderr)
            return 1
        _print_drive(info)
        entries = [info.to_dict()]

    else:
        requested = args.paths
        results = asyncio.run(collect_details(args.paths, config, timeout=args.timeout))
        for path, details in zip(args.paths, results):
            if details is None:
                print(f"Fehler: Pfad nicht gefunden oder nicht lesbar: {path}", file=sys.stderr)
                continue
            _print_details(details)
            entries.append(details.to_dict())
        if not entries:
            return 1

    if args.output:
        output_path = Path(args.output).resolve()
        save_report(generate_report(args.command, entries, requested), output_path)
        print(f"\nReport gespeichert: {output_path}")

    return 0


def run_scan(paths: list[str], output_path: str | None = None, timeout: float | None = None) -> dict:
    """Programmatischer Einstiegspunkt für Detail-Scans (ohne argparse/sys.exit).

    Args:
        paths: Zu analysierende Dateien/Ordner.
        output_path: Optionaler Pfad für den JSON-Report.
        timeout: Abbruch der Ordneranalyse nach N Sekunden.

    Returns:
        Der Report als Dict.

    Raises:
        ValueError: Wenn keine Pfade übergeben wurden.
    """
    if not paths:
        raise ValueError("Keine Pfade angegeben")

    config = load_config()
    results = asyncio.run(collect_details(paths, config, timeout=timeout, progress=False))
    entries = [details.to_dict() for details in results if details is not None]
    report = generate_report("details", entries, list(paths))
    if output_path:
        save_report(report, Path(output_path).resolve())
    return report


if __name__ == "__main__":
    sys.exit(main())
