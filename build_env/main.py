#!/usr/bin/env python3
"""
Main entry point for the Pijul development environment
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigLoader
from .descriptor import EffectiveDependencySet
from .exceptions import ProvisioningFailure
from .platform import PlatformDetector, detect_host_platform
from .provisioners import EnvironmentHandle, ProvisioningOrchestrator
from .utils import Logger


class BuildEnvironment:
    """Main development environment class"""

    def __init__(self,
                 root_dir: Optional[Path] = None,
                 config_dir: Optional[Path] = None,
                 work_dir: Optional[Path] = None,
                 platform: str = "auto",
                 verbose: bool = False,
                 dry_run: bool = False):
        """
        Initialize the development environment

        Args:
            root_dir: Project root directory
            config_dir: Directory holding environment.yaml and platforms.yaml
            work_dir: Directory generated files are written to
            platform: Host platform identifier or alias, or auto to detect it
            verbose: Enable verbose output
            dry_run: Resolve and render without invoking the orchestrator
        """
        self.root_dir = root_dir or Path.cwd()
        self.verbose = verbose
        self.dry_run = dry_run

        self.logger = Logger(verbose=verbose)

        self.config = ConfigLoader(config_dir)

        if platform == "auto":
            self.platform_info = PlatformDetector().detect()
            self.platform = detect_host_platform()
        else:
            self.platform = self.config.normalize_platform(platform)
            self.platform_info = {"platform": self.platform}

        if not self.config.is_known_platform(self.platform):
            # Not an error: an unknown host just gets no platform-specific dependencies
            self.logger.warning(f"Unrecognized platform: {self.platform}. "
                                f"Known: {', '.join(self.config.get_platforms())}")

        self.logger.debug(f"Platform info: {self.platform_info}")

        self.work_dir = work_dir or self.root_dir / self.config.get_option("work_dir", "build/devenv")

        self.orchestrator = ProvisioningOrchestrator(
            config=self.config,
            host_platform=self.platform,
            work_dir=self.work_dir,
            logger=self.logger,
            dry_run=dry_run
        )

    def resolve(self) -> EffectiveDependencySet:
        """Resolve the dependency set for this host"""
        return self.orchestrator.resolve()

    def render(self) -> str:
        """Render the nix-shell expression for this host"""
        provisioner = self.orchestrator.get_provisioner("nix")
        return provisioner.render(self.resolve())

    def shell(self,
              provisioner: Optional[str] = None,
              command: Optional[str] = None) -> EnvironmentHandle:
        """
        Provision the environment

        Args:
            provisioner: Provisioner name (nix, manifest)
            command: Command to run inside the environment

        Returns:
            Handle describing the provisioned environment

        Raises:
            ProvisioningFailure: The orchestrator failed
        """
        handle = self.orchestrator.provision(provisioner, command=command)
        self.logger.debug(f"Provisioned with {handle.provisioner} (status {handle.returncode})")
        return handle

    def show_info(self) -> None:
        """Show environment information"""
        from . import __version__

        info = self.orchestrator.get_provision_info()

        print(f"\nPijul Development Environment v{__version__}")
        print(f"{'='*50}")
        print(f"Project: {info['name']}")
        print(f"Platform: {info['platform']}")
        print(f"Condition: {info['condition']} "
              f"({'holds' if info['condition_holds'] else 'does not hold'})")
        print(f"Work Directory: {info['work_dir']}")
        print(f"\nDependencies ({len(info['dependencies'])}):")

        for dep in info["dependencies"]:
            print(f"  - {dep}")

        print(f"\nKnown platforms: {', '.join(self.config.get_platforms())}")
        print(f"Provisioners: {', '.join(ProvisioningOrchestrator.PROVISIONER_MAP)}")


def main(argv=None):
    """Command-line interface"""
    parser = argparse.ArgumentParser(
        description="Pijul development environment - resolves native build dependencies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s resolve                  # List dependencies for this host
  %(prog)s resolve --platform darwin --json
  %(prog)s render                   # Print the nix-shell expression
  %(prog)s shell                    # Enter the environment
  %(prog)s shell --run "cargo build"
  %(prog)s info                     # Show environment information
        """
    )

    parser.add_argument(
        "command",
        choices=["resolve", "render", "shell", "info"],
        help="Command to execute"
    )

    parser.add_argument(
        "--platform",
        default="auto",
        help="Host platform identifier or alias (default: auto-detect)"
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        help="Directory containing environment.yaml and platforms.yaml"
    )

    parser.add_argument(
        "--work-dir",
        type=Path,
        help="Directory generated files are written to"
    )

    parser.add_argument(
        "--provisioner",
        choices=sorted(ProvisioningOrchestrator.PROVISIONER_MAP),
        help="Provisioner used by the shell command (default: from config)"
    )

    parser.add_argument(
        "--run",
        dest="run_command",
        help="Command to run inside the environment (shell command only)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print resolved dependencies as JSON (resolve command only)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and render without invoking the orchestrator"
    )

    args = parser.parse_args(argv)

    try:
        env = BuildEnvironment(
            config_dir=args.config_dir,
            work_dir=args.work_dir,
            platform=args.platform,
            verbose=args.verbose,
            dry_run=args.dry_run
        )
    except Exception as e:
        print(f"Error initializing environment: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "resolve":
            dependency_set = env.resolve()
            if args.json:
                print(json.dumps(list(dependency_set.identifiers)))
            else:
                for identifier in dependency_set.identifiers:
                    print(identifier)

        elif args.command == "render":
            sys.stdout.write(env.render())

        elif args.command == "shell":
            env.shell(provisioner=args.provisioner, command=args.run_command)

        elif args.command == "info":
            env.show_info()

    except ProvisioningFailure as e:
        # Orchestrator output is passed through untouched
        if e.stdout:
            sys.stdout.write(e.stdout)
        if e.stderr:
            sys.stderr.write(e.stderr)
        env.logger.error(str(e))
        sys.exit(e.returncode or 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        env.logger.error(f"Environment error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
