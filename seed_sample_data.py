# seed_sample_data.py
# Purpose: insert the sample semesters and words into an empty database.
# Usage: python seed_sample_data.py from the project root.

from vocabdrill_app import create_app
from vocabdrill_app.core.seeds import seed_sample_data


def main():
    app = create_app()
    with app.app_context():
        result = seed_sample_data()
        if result["skipped"]:
            print("Semesters already exist, nothing seeded.")
            return
        print(f"Seeded {result['semesters']} semesters with {result['words']} words.")


if __name__ == '__main__':
    main()
