# mod_core/convert_cli.py
import argparse
import sys
from pathlib import Path
from datetime import datetime

from .config import TAIL_CHILD_MODES, load_config
from .daemon_client import request_conversion
from .modifier_chain import convert


def read_widget_from_file(filepath: str) -> str:
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read()


def save_output_to_file(content: str, output_path: str):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)


def log_conversion(source: str, output: str, log_path: str):
    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(f"\n--- Input [{datetime.now()}] ---\n{source}\n")
        f.write(f"\n--- Output ---\n{output}\n")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Widget tree → Modifier chain")
    parser.add_argument("infile", help="Path to a file holding the widget expression")
    parser.add_argument("--out", help="Path to save the converted text")
    parser.add_argument("--log", help="Optional log file (e.g., logs/conversions.log)")
    parser.add_argument("--tail-child", choices=TAIL_CHILD_MODES,
                        help="Source of the trailing child: last chain widget or terminal call")
    parser.add_argument("--escape-snippet", action="store_true",
                        help="Escape '$' so the output can be inserted as an editor snippet")
    parser.add_argument("--remote", help="Convert through a running daemon at this URL")
    parser.add_argument("--config", help="Optional YAML configuration file")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"[!] Error loading configuration: {e}")
        return 1

    try:
        source = read_widget_from_file(args.infile)
    except FileNotFoundError:
        print(f"[!] Error: Input file not found at '{args.infile}'")
        return 1

    if not source.strip():
        print(f"[!] Error: Input file '{args.infile}' is empty.")
        return 1

    tail_child = args.tail_child or config["tail_child"]

    if args.remote:
        print(f"[*] Sending to daemon at {args.remote}...")
        output = request_conversion(source, url=args.remote, escape_snippet=args.escape_snippet,
                                    tail_child=tail_child)
        if output.startswith("ERROR:"):
            print(f"[!] {output}")
            return 1
    else:
        output = convert(source, tail_child=tail_child, escape=args.escape_snippet,
                         max_depth=config["max_chain_depth"])

    print(output)

    if args.out:
        save_output_to_file(output, args.out)
        print(f"\n[*] Saved output to {args.out}")

    if args.log:
        log_conversion(source, output, args.log)
        print(f"\n[*] Logged conversion to {args.log}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
