"""
Command-line interface for httpsignatures
Verifies or inspects HTTP Signatures carried by a request described on the command line
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .config import VerifierConfig, load_config_from_env, load_config_from_file
from .exceptions import HttpSignaturesError, SignatureParameterError
from .parser import extract_signature_header, parse_signature_parameters
from .types import VerifiableRequest, VerificationParameters
from .verifier import SignatureVerifier

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='httpsig',
        description='Verify and inspect HTTP Signatures (draft-cavage) on requests'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'httpsignatures {__version__}'
    )
    parser.add_argument(
        '--config',
        help='JSON configuration file (defaults to HTTPSIG_* environment variables)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    setup_verify_parser(subparsers)
    setup_parse_parser(subparsers)

    return parser


def _add_request_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--method', default='GET', help='HTTP method (default: GET)')
    parser.add_argument('--url', default='/', help='Request URL or path with query (default: /)')
    parser.add_argument(
        '-H', '--header',
        action='append',
        default=[],
        dest='headers',
        metavar='"NAME: VALUE"',
        help='Request header, may be repeated'
    )


def setup_verify_parser(subparsers):
    """Setup verify subcommand."""
    verify_parser = subparsers.add_parser('verify', help='Verify the signature on a request')
    _add_request_arguments(verify_parser)
    key_group = verify_parser.add_mutually_exclusive_group(required=True)
    key_group.add_argument('--key', help='Shared secret as text')
    key_group.add_argument('--key-file', help='File containing the raw shared secret')


def setup_parse_parser(subparsers):
    """Setup parse subcommand."""
    parse_parser = subparsers.add_parser('parse', help='Show the signature parameters of a request')
    _add_request_arguments(parse_parser)
    parse_parser.add_argument(
        '--value',
        help='Parse this parameter string instead of reading it from the request headers'
    )


def parse_header_arguments(values: List[str]) -> Dict[str, str]:
    """Split ``Name: value`` arguments into a header dictionary."""
    headers: Dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition(':')
        if not sep or not name.strip():
            raise ValueError(f"Invalid header (expected 'Name: value'): {item}")
        # A single space after the colon belongs to the syntax, not the value
        headers[name.strip()] = value[1:] if value.startswith(' ') else value
    return headers


def load_config(args) -> VerifierConfig:
    if args.config:
        return load_config_from_file(args.config)
    return load_config_from_env()


def describe_parameters(params: Optional[VerificationParameters]) -> Dict[str, Any]:
    if params is None or params.sig_params is None:
        return {}
    sig_params = params.sig_params
    return {
        'key_id': sig_params.key_id,
        'algorithm': sig_params.algorithm.value if sig_params.algorithm else None,
        'headers': list(sig_params.headers),
        'signature': params.signature,
    }


def error_output(error: HttpSignaturesError) -> Dict[str, Any]:
    output: Dict[str, Any] = {
        'valid': False,
        'error': {'code': error.error_code, 'message': error.message},
    }
    if isinstance(error, SignatureParameterError):
        output['parameters'] = describe_parameters(error.parameters)
    return output


def read_key(args) -> bytes:
    if args.key is not None:
        return args.key.encode('utf-8')
    with open(args.key_file, 'rb') as f:
        return f.read()


def build_request(args) -> VerifiableRequest:
    return VerifiableRequest.from_url(args.method, args.url, parse_header_arguments(args.headers))


def handle_verify_command(args, config: VerifierConfig) -> int:
    """Handle signature verification."""
    key = read_key(args)
    verifier = SignatureVerifier(config)

    try:
        request = build_request(args)
        params = verifier.parse(request)
        valid = verifier.verify_request(request, key)
    except HttpSignaturesError as e:
        print(json.dumps(error_output(e), indent=2))
        return EXIT_ERROR

    output = {'valid': valid}
    output.update(describe_parameters(params))
    print(json.dumps(output, indent=2))
    return EXIT_VALID if valid else EXIT_INVALID


def handle_parse_command(args, config: VerifierConfig) -> int:
    """Handle parameter inspection."""
    try:
        if args.value is not None:
            text = args.value
        else:
            text = extract_signature_header(
                build_request(args),
                authorization_header=config.authorization_header,
                signature_header=config.signature_header,
                auth_scheme=config.auth_scheme,
            )
        params = parse_signature_parameters(text)
    except HttpSignaturesError as e:
        print(json.dumps(error_output(e), indent=2))
        return EXIT_ERROR

    print(json.dumps(describe_parameters(params), indent=2))
    return EXIT_VALID


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: 0 for a valid signature, 1 for an invalid one, 2 on errors
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        config = load_config(args)
    except HttpSignaturesError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging_level(),
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        if args.command == 'verify':
            return handle_verify_command(args, config)
        return handle_parse_command(args, config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
