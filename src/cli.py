"""Command-line interface for trying receipt extraction on local .eml files.

Runs the extraction steps against Bedrock and prints the ledger rows that
would be written. Nothing is written to the spreadsheet.
"""

import argparse
import json
import logging
from pathlib import Path

from receiptbot import BedrockClient, EmailParser, ExtractedData
from receiptbot.pipeline import log_extracted_data
from receiptbot.processing import select_content, select_images
from receiptbot.semantic import build_request, deduplicate, sanitize
from receiptbot.storage import prepare_rows


def process_eml_file(client: BedrockClient, eml_path: Path) -> ExtractedData:
    """Extract receipt items from a single .eml file.

    Args:
        client: Initialized Bedrock client
        eml_path: Path to .eml file

    Returns:
        ExtractedData: Sanitized, deduplicated items
    """
    print(f"\nProcessing: {eml_path.name}")

    with open(eml_path, 'rb') as f:
        parsed = EmailParser.parse(f.read())

    content = select_content(parsed)
    images = select_images(parsed)
    if content is None and not images:
        print("  Skipped: no body and no usable images")
        return ExtractedData(items=[])

    data = sanitize(client.invoke(build_request(content, images)))
    data.items = deduplicate(data.items)
    log_extracted_data(data)

    for row in prepare_rows(data.items):
        print(f"  {row}")

    return data


def process_directory(client: BedrockClient, directory: Path) -> dict[str, ExtractedData]:
    """Process all .eml files in a directory.

    Args:
        client: Initialized Bedrock client
        directory: Path to directory containing .eml files

    Returns:
        Mapping of file name to extracted data
    """
    results = {}

    for eml_file in sorted(directory.glob("*.eml")):
        try:
            results[eml_file.name] = process_eml_file(client, eml_file)
        except Exception as e:
            print(f"Error processing {eml_file}: {e}")
            continue

    return results


def save_results(results: dict[str, ExtractedData], output_path: Path) -> None:
    """Save extracted data to a JSON file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(
            {name: data.model_dump(by_alias=True) for name, data in results.items()},
            f,
            indent=2,
            ensure_ascii=False,
        )


def main():
    """Main CLI entry point."""
    arg_parser = argparse.ArgumentParser(description=__doc__)
    arg_parser.add_argument("path", type=Path, help=".eml file or directory of .eml files")
    arg_parser.add_argument("--model-id", required=True, help="Bedrock model ID")
    arg_parser.add_argument("--region", default=None, help="AWS region")
    arg_parser.add_argument("--output", type=Path, default=Path("results.json"))
    args = arg_parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    client = BedrockClient(model_id=args.model_id, region_name=args.region)

    if args.path.is_dir():
        results = process_directory(client, args.path)
    else:
        results = {args.path.name: process_eml_file(client, args.path)}

    save_results(results, args.output)
    print(f"\nResults saved to: {args.output}")
    print(f"Emails processed: {len(results)}")
    print(f"Items extracted: {sum(len(data.items) for data in results.values())}")


if __name__ == "__main__":
    main()
