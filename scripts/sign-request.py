#!/usr/bin/env python3
"""
Sign a Swedbank request and verify the detached JWS locally.
Run with: python scripts/sign-request.py --key private.pem --client-id ID --url URL [--body body.json]

Prints the x-jws-signature value, the decoded header, and whether the
signature verifies against the public key derived from the private key.
Useful when comparing against a signature rejected by the sandbox.
"""
import argparse
import json
import sys
from pathlib import Path

from cryptography.hazmat.primitives import serialization

from swedbank_pi.errors import SwedbankError
from swedbank_pi.signers import EmptyPayload, JsonPayload, JwsSigner, decode_header


def public_pem_from_private(private_pem: str) -> str:
    """
    Derive the PEM public key from a PEM private key.

    Args:
        private_pem: PEM-encoded private key

    Returns:
        PEM-encoded SubjectPublicKeyInfo
    """
    key = serialization.load_pem_private_key(private_pem.strip().encode(), password=None)
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


def main() -> int:
    """
    Main signing function.

    Returns:
        0 if the token verifies, 1 otherwise
    """
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('--key', required=True, type=Path, help='PEM private key file')
    parser.add_argument('--client-id', required=True)
    parser.add_argument('--url', required=True, help='Full request URL')
    parser.add_argument('--body', type=Path, help='JSON body file (omit for GET requests)')
    args = parser.parse_args()

    private_pem = args.key.read_text(encoding='utf-8')
    if args.body:
        payload = JsonPayload(json.loads(args.body.read_text(encoding='utf-8')))
    else:
        payload = EmptyPayload()

    try:
        token = JwsSigner().sign(payload, args.url, args.client_id, private_pem)
        valid = JwsSigner.verify(token, payload, public_pem_from_private(private_pem))
    except (SwedbankError, ValueError) as exc:
        print(f'ERROR: {exc}')
        return 1

    print(f'x-jws-signature: {token}\n')
    print('Header:')
    print(json.dumps(decode_header(token), indent=2))
    if payload.serialize():
        print(f'\nSigned body: {payload.serialize()}')

    print(f'\n{"=" * 50}')
    if not valid:
        print('VERIFICATION FAILED')
        return 1

    print('VERIFICATION PASSED')
    return 0


if __name__ == '__main__':
    sys.exit(main())
