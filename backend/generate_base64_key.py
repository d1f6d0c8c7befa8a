import base64
import json
import os
import sys


def find_key_file(directory='.'):
    """Find a service account JSON file in directory"""
    files = sorted(f for f in os.listdir(directory) if f.endswith('.json') and 'service' in f.lower())
    return os.path.join(directory, files[0]) if files else None


def encode_key_file(filename):
    """Return the base64 encoding of a service account JSON file.

    Raises ValueError if the file is not valid JSON or lacks client_email.
    """
    with open(filename, 'r', encoding='utf-8') as f:
        content = f.read()

    info = json.loads(content)
    if not isinstance(info, dict) or 'client_email' not in info:
        raise ValueError(f"{filename} does not look like a service account key (no client_email)")

    return base64.b64encode(content.encode('utf-8')).decode('utf-8')


def generate_key(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    filename = argv[0] if argv else find_key_file()

    if not filename:
        print("No service account JSON file found in the current directory.")
        print("Place your Google service account key here (e.g., service-account.json) or pass its path.")
        return 1

    print(f"Found file: {filename}")

    try:
        encoded = encode_key_file(filename)
    except (OSError, ValueError) as e:
        print(f"Error processing file: {e}")
        return 1

    print("\nSUCCESS! Here is your base64 encoded string for GOOGLE_SERVICE_ACCOUNT_KEY_BASE64:\n")
    print(encoded)
    print("\nCopy the above string (without newlines) into your .env file or hosting environment variables.")
    print("Remember to share the spreadsheet with the service account's client_email.")
    return 0


if __name__ == "__main__":
    sys.exit(generate_key())
