# import_words.py
# Purpose: import a CSV/XLSX word list into a semester.
# Usage: python import_words.py <semester_id> <file> [--clear]
#
# Columns use the import aliases: w|word, p|phonetic, m|meaning,
# ex|exampleEn|example_en, exc|exampleCn|example_cn.

import argparse
import os

from vocabdrill_app import create_app
from vocabdrill_app.core.error_handlers import NotFoundError
from vocabdrill_app.modules.vocabulary.services import VocabularyService, read_word_file


def main():
    parser = argparse.ArgumentParser(description='Import a word list into a semester.')
    parser.add_argument('semester_id', type=int)
    parser.add_argument('file')
    parser.add_argument('--clear', action='store_true', help='delete the semester words first')
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        try:
            records = read_word_file(args.file, os.path.basename(args.file))
            result = VocabularyService.import_words(args.semester_id, records, clear_existing=args.clear)
        except (ValueError, NotFoundError) as exc:
            print(f"Import failed: {exc}")
            raise SystemExit(1)
        print(
            f"Imported {result['imported']} words into semester {args.semester_id} "
            f"(skipped {result['skipped']}, cleared {result['cleared']})."
        )


if __name__ == '__main__':
    main()
