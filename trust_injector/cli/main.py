"""
Main CLI entry point for trust-injector.

Provides command-line interface with YAML configuration support
for installing and removing a CA certificate.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from colorama import just_fix_windows_console, Fore, Style

from ..__version__ import __version__
from ..exceptions import TrustInjectorError
from .config import load_config, create_default_config, validate_config, installer_options, layouts_from_config

just_fix_windows_console()


def print_ok(msg):
    """Print success message in green."""
    print(f"{Fore.GREEN}[OK] {msg}{Style.RESET_ALL}")


def print_error(msg):
    """Print error message in red."""
    print(f"{Fore.RED}[ERROR] {msg}{Style.RESET_ALL}", file=sys.stderr)


def print_warn(msg):
    """Print warning message in yellow."""
    print(f"{Fore.YELLOW}[WARN] {msg}{Style.RESET_ALL}")


def print_info(msg):
    """Print info message in cyan."""
    print(f"{Fore.CYAN}[INFO] {msg}{Style.RESET_ALL}")


def _load(args):
    """Load and validate --config, or return an empty config."""
    if not getattr(args, "config", None):
        return {}
    print_info(f"Loading config from {args.config}")
    config = load_config(args.config)
    validate_config(config)
    return config


def _setup_logging(args, config):
    level = config.get("logging", {}).get("level", "INFO")
    if args.verbose:
        level = "DEBUG"
    logging.basicConfig(level=str(level).upper(), format='[%(asctime)s] %(message)s')


def _warn_if_not_root():
    if hasattr(os, "geteuid") and os.geteuid() != 0:
        print_warn("Root privileges are required to change the system trust store. Re-run with sudo if this fails.")


def _report_nss(outcomes):
    if not outcomes:
        print_info("No NSS databases found")
        return
    for outcome in outcomes:
        if outcome.ok:
            print(f"  {Fore.GREEN}• {outcome.database}{Style.RESET_ALL}")
        else:
            reason = outcome.error or f"certutil exited with status {outcome.returncode}"
            print(f"  {Fore.YELLOW}• {outcome.database}: {reason}{Style.RESET_ALL}")


def _run(action, args):
    from ..installer import install_ca, uninstall_ca

    config = _load(args)
    _setup_logging(args, config)
    options = installer_options(config)
    if args.no_nss:
        options["nss"] = False

    cert = args.certificate
    _warn_if_not_root()
    if action == "install":
        outcomes = install_ca(cert, **options)
        print_ok(f"Installed CA certificate {cert}")
    else:
        outcomes = uninstall_ca(cert, **options)
        print_ok(f"Uninstalled CA certificate {cert}")

    if options["nss"]:
        _report_nss(outcomes)
    return 0


def cmd_install(args):
    """Install a CA certificate into the system and NSS trust stores."""
    if not Path(args.certificate).is_file():
        print_error(f"Certificate not found: {args.certificate}")
        return 1
    return _run("install", args)


def cmd_uninstall(args):
    """Remove a previously installed CA certificate."""
    return _run("uninstall", args)


def cmd_detect(args):
    """Show the trust-store layout that would be used on this host."""
    from ..trust_store import resolve

    config = _load(args)
    _setup_logging(args, config)
    layout = resolve(layouts_from_config(config) or None)

    command = " ".join([layout.rebuild_binary, *layout.rebuild_args])
    print(f"  {Fore.CYAN}Anchor directory: {layout.anchor_dir}{Style.RESET_ALL}")
    print(f"  {Fore.CYAN}Rebuild command: {command}{Style.RESET_ALL}")
    print(f"  {Fore.CYAN}Registry file: {layout.registry_path or '-'}{Style.RESET_ALL}")
    print(f"  {Fore.CYAN}Anchor extension: {layout.extension}{Style.RESET_ALL}")
    return 0


def cmd_list_nss(args):
    """List candidate NSS databases and whether each exists."""
    from ..nss import nss_databases

    config = _load(args)
    _setup_logging(args, config)
    extra = config.get("nss", {}).get("databases", [])
    for db in nss_databases(extra=extra):
        if db.is_dir():
            print(f"  {Fore.GREEN}• {db}{Style.RESET_ALL}")
        else:
            print(f"  {Fore.LIGHTBLACK_EX}• {db} (missing){Style.RESET_ALL}")
    return 0


def cmd_init_config(args):
    """Create default configuration file."""
    output = args.output or "trust-injector.yaml"
    try:
        create_default_config(output)
    except OSError as e:
        print_error(f"Failed to create config: {e}")
        return 1
    print_ok(f"Created configuration file: {output}")
    print_info(f"Edit this file and use: trust-injector install CERT --config {output}")
    return 0


def cmd_version(args):
    """Show version information."""
    from ..__version__ import __title__, __description__
    print(f"{Fore.CYAN}{__title__}{Style.RESET_ALL} v{Fore.GREEN}{__version__}{Style.RESET_ALL}")
    print(__description__)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="trust-injector",
        description="Install or remove a CA certificate in the system and NSS trust stores",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    install_parser = subparsers.add_parser("install", help="Install a CA certificate")
    install_parser.add_argument("certificate", help="Path to the CA certificate file")
    install_parser.add_argument("--config", "-c", help="YAML configuration file")
    install_parser.add_argument("--no-nss", action="store_true", help="Skip NSS databases")
    install_parser.set_defaults(func=cmd_install)

    uninstall_parser = subparsers.add_parser("uninstall", help="Remove a CA certificate")
    uninstall_parser.add_argument("certificate", help="Path given when the certificate was installed")
    uninstall_parser.add_argument("--config", "-c", help="YAML configuration file")
    uninstall_parser.add_argument("--no-nss", action="store_true", help="Skip NSS databases")
    uninstall_parser.set_defaults(func=cmd_uninstall)

    detect_parser = subparsers.add_parser("detect", help="Show the detected trust store")
    detect_parser.add_argument("--config", "-c", help="YAML configuration file")
    detect_parser.set_defaults(func=cmd_detect)

    nss_parser = subparsers.add_parser("list-nss", help="List NSS databases for the current user")
    nss_parser.add_argument("--config", "-c", help="YAML configuration file")
    nss_parser.set_defaults(func=cmd_list_nss)

    config_parser = subparsers.add_parser("init-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", help="Output config file path")
    config_parser.set_defaults(func=cmd_init_config)

    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except FileNotFoundError as e:
        print_error(str(e))
        return 1
    except TrustInjectorError as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
