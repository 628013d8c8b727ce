# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for id3reader

Prints the ID3 metadata of one or more audio files.

Copyright 2025 DNAi inc.
"""

import argparse
import csv
import io
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from id3reader import __version__
from id3reader.config import ReaderConfig, TagScanMode, UTF16Mode
from id3reader.exceptions import ID3ReaderError
from id3reader.reader import MP3Reader

logger = logging.getLogger(__name__)


def _display(value: Any) -> str:
    # Undecodable UTF-8 bytes are kept as surrogates in the record
    return str(value).encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


def _split_key(key: str) -> Tuple[str, str]:
    group, _, name = key.partition(':')
    return (group, name) if name else ('', key)


def format_output(metadata: Dict[str, Any], format_type: str = "text") -> str:
    """
    Render a ``Group:Tag`` dictionary.

    Text output prints one ``---- Group ----`` heading per group, followed
    by its ``Group:Tag: value`` lines in insertion order. CSV output has a
    Group, Tag and Value column.

    Args:
        metadata: Dictionary from ``MP3Reader.to_dict``
        format_type: Output format ('text', 'json', 'csv')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(
            {key: _display(v) if isinstance(v, str) else v for key, v in metadata.items()},
            indent=2,
            ensure_ascii=False,
        )

    if format_type == "csv":
        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(["Group", "Tag", "Value"])
        for key, value in metadata.items():
            writer.writerow([*_split_key(key), _display(value)])
        return out.getvalue().rstrip("\n")

    lines = []
    current = None
    for key, value in metadata.items():
        group = _split_key(key)[0]
        if group != current:
            lines.append(f"---- {group} ----")
            current = group
        lines.append(f"{key}: {_display(value)}")
    return "\n".join(lines)


def read_metadata(
    file_path: Path,
    config: ReaderConfig,
    format_type: str = "text",
    frame_info: bool = False,
    picture_path: Optional[Path] = None
) -> str:
    """
    Read metadata from a file.

    Args:
        file_path: Path to the audio file
        config: Reader configuration
        format_type: Output format
        frame_info: Include the first MPEG audio frame header
        picture_path: Where to save the embedded picture, if any

    Returns:
        Formatted metadata string

    Raises:
        ID3ReaderError: If the file cannot be read
    """
    with MP3Reader(file_path, config) as reader:
        record = reader.get_metadata()
        metadata = reader.to_dict(include_frame_info=frame_info, record=record)
        if picture_path is not None:
            if record.image is not None:
                picture_path.write_bytes(record.image.tobytes())
                metadata['ID3v2:PictureSavedTo'] = str(picture_path)
            else:
                logger.warning("%s has no embedded picture", file_path)
    return format_output(metadata, format_type)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='id3reader',
        description='Read ID3v1/ID3v2 metadata from audio files',
    )
    parser.add_argument('files', nargs='+', type=Path, help='Audio files to read')
    output = parser.add_mutually_exclusive_group()
    output.add_argument('-j', '--json', dest='format', action='store_const', const='json',
                        help='JSON output')
    output.add_argument('--csv', dest='format', action='store_const', const='csv',
                        help='CSV output')
    parser.add_argument('--strict-scan', action='store_true',
                        help='Only accept an ID3v2 tag at offset 0 and tags following it')
    parser.add_argument('--full-utf16', action='store_true',
                        help='Decode UTF-16 text fully instead of keeping ASCII only')
    parser.add_argument('--frame-info', action='store_true',
                        help='Show the first MPEG audio frame header')
    parser.add_argument('--extract-picture', type=Path, metavar='PATH',
                        help='Save the embedded picture (single input file only)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.set_defaults(format='text')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    if args.extract_picture and len(args.files) > 1:
        parser.error('--extract-picture takes a single input file')

    config = ReaderConfig(
        scan_mode=TagScanMode.ANCHORED if args.strict_scan else TagScanMode.SCAN,
        utf16_mode=UTF16Mode.FULL if args.full_utf16 else UTF16Mode.ASCII_ONLY,
    )

    status = 0
    for index, file_path in enumerate(args.files):
        try:
            output = read_metadata(
                file_path,
                config,
                format_type=args.format,
                frame_info=args.frame_info,
                picture_path=args.extract_picture,
            )
        except ID3ReaderError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            status = 1
            continue
        if len(args.files) > 1 and args.format == 'text':
            if index:
                print()
            print(f"======== {file_path}")
        print(output)
    return status


if __name__ == "__main__":
    sys.exit(main())
