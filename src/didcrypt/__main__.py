"""The Command Line Interface for didcrypt, including Interactive elements.

A hybrid CLI/ICLI: anything missing from the command line is asked for interactively, unless `--non-interactive`
is set, in which case missing values without a default are an error. Key material is only ever printed, never
written to disk.

Typical usage example:

    didcrypt keygen --scheme encryption
    didcrypt encrypt --public-key P:bob.pub --message "Hi Bob, this is Alice!"
    OR
    python -m didcrypt
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import json
import sys
import typing

from dotenv import load_dotenv

import didcrypt
from didcrypt import config

GENERIC_FAILURE = "Cannot process the supplied data."


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in didcrypt.",
            choices=["keygen", "encrypt", "decrypt", "sign", "verify"],
        ),
    "keygen":
        HelpData("Key pair generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "sign":
        HelpData("Signing utility."),
    "verify":
        HelpData("Signature verification utility."),
    "scheme":
        HelpData(
            description="What the key pair will be used for.",
            choices=["encryption", "signing"],
        ),
    "encryption":
        HelpData("RSA-OAEP with SHA-256."),
    "signing":
        HelpData("RSASSA-PKCS1-v1_5 with SHA-256."),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=config.KEY_SIZE_CHOICES,
            default=str(config.KEY_SIZE),
            advanced=True,
        ),
    "public_key":
        HelpData(description="Base-64 public key, or path to a file holding it if prefixed with `P:`."),
    "private_key":
        HelpData(description="Base-64 private key, or path to a file holding it if prefixed with `P:`."),
    "message":
        HelpData(description="Message or path to file containing payload. If Path start with `P:`"),
    "signature":
        HelpData(description="The base-64 signature to check, or path to a file holding it if prefixed with `P:`."),
}

needs = {
    "keygen": ("scheme", "keysize"),
    "encrypt": ("public_key", "message"),
    "decrypt": ("private_key", "message"),
    "sign": ("private_key", "message"),
    "verify": ("public_key", "message", "signature"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public-key", "-p", dest="public_key", help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private-key", "-P", dest="private_key", help=help_dict["private_key"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", "-m", help=help_dict["message"].description)
corep = argparse.ArgumentParser(prog="didcrypt")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {didcrypt.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--log-level", help=f"Logging level. Defaults to ${config.LOG_LEVEL_ENV} or WARNING.")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", help=help_dict["keygen"].description)
keygen.add_argument("--scheme", "-s", choices=help_dict["scheme"].choices, help=help_dict["scheme"].description)
keygen.add_argument("--keysize", "-k", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, payloads], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, payloads], help=help_dict["decrypt"].description)
sign = commands.add_parser("sign", parents=[privkey, payloads], help=help_dict["sign"].description)
verify = commands.add_parser("verify", parents=[pubkey, payloads], help=help_dict["verify"].description)
verify.add_argument("--signature", "-S", help=help_dict["signature"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str, enc: str = "utf-8") -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        with open(mess[2:], "r", encoding=enc) as f:
            mess = f.read()
    return mess


def check_token(mess: str) -> str:
    """Like `check_message`, for base-64 values that may come with a trailing newline from a file."""
    return check_message(mess, "ascii").strip()


def run(args: argparse.Namespace, pspr: typing.Callable) -> int:
    """Executes one fully specified subcommand. Returns the process exit status."""
    match args.subcommand:
        case "keygen":
            manager = didcrypt.KeyManager(size=int(args.keysize))
            if args.scheme == "encryption":
                pair = manager.generate_encryption_key_pair()
            else:
                pair = manager.generate_signing_key_pair()
            print(json.dumps({
                "scheme": args.scheme,
                "publicKey": str(pair.public_key),
                "privateKey": str(pair.private_key)
            }, indent=2))
            pspr("\nKey pair generated! Store the private key somewhere safe.")
        case "encrypt":
            key = didcrypt.EncryptionPublicKey.from_text(check_token(args.public_key))
            ciph = didcrypt.encrypt(check_message(args.message), key)
            pspr("Ciphertext:")
            print(ciph)
        case "decrypt":
            key = didcrypt.EncryptionPrivateKey.from_text(check_token(args.private_key))
            clear = didcrypt.decrypt(check_token(args.message), key)
            pspr("Cleartext:")
            print(clear)
        case "sign":
            key = didcrypt.SigningPrivateKey.from_text(check_token(args.private_key))
            signature = didcrypt.sign(check_message(args.message), key)
            pspr("Signature:")
            print(signature)
        case "verify":
            key = didcrypt.SigningPublicKey.from_text(check_token(args.public_key))
            if didcrypt.verify(check_message(args.message), check_token(args.signature), key):
                pspr("Signature Verified!")
            else:
                print("Signature Verification Failed!")
                return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    load_dotenv()
    args = corep.parse_args(argv)
    config.configure_logging(args.log_level)
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to didcrypt!\n")
    try:
        if not args.subcommand:
            args.subcommand = choice_handler("subcommand", pstatus)
        for reqs in needs[args.subcommand]:
            if getattr(args, reqs, None) is None:
                if help_dict[reqs].choices is not None:
                    res = choice_handler(reqs, pstatus)
                else:
                    res = input_handler(reqs, pstatus)
                setattr(args, reqs, res)
            else:
                pspr(f"{reqs}: {getattr(args, reqs)}")
    except IOError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 2
    pspr("\nInput Complete! Executing...")
    try:
        status = run(args, pspr)
    except (didcrypt.DecryptionFailure, didcrypt.MalformedSignature):
        print(GENERIC_FAILURE, file=sys.stderr)
        return 2
    except (didcrypt.CryptoError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 2
    pspr("Thank you for using didcrypt!")
    pspr("Goodbye!")
    return status


if __name__ == "__main__":
    sys.exit(main())
