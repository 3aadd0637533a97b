"""
Shiva - Startup Validation
Ensures configuration is valid before the bot connects.
"""

import json
import os
import shutil
import sys
from pathlib import Path
from typing import List, Tuple

from logger import Colors

BASE_DIR = Path(__file__).parent


def ok(msg): print(f"{Colors.OK}✓{Colors.END} {msg}")
def warn(msg): print(f"{Colors.WARN}⚠{Colors.END} {msg}")
def fail(msg): print(f"{Colors.FAIL}✗{Colors.END} {msg}")


def check_env_file(interactive: bool = True) -> Tuple[bool, List[str]]:
    """Check if .env file exists, offer to create from example."""
    env_file = BASE_DIR / ".env"
    env_example = BASE_DIR / ".env.example"

    if env_file.exists():
        ok(".env file found")
        return True, []

    # Plain environment variables work too (containers, CI)
    if os.getenv("DISCORD_TOKEN"):
        warn(".env file missing, using process environment")
        return True, []

    if env_example.exists() and interactive:
        fail(".env file missing!")
        try:
            response = input("\nCreate .env from .env.example? [Y/n]: ").strip().lower()
            if response in ('', 'y', 'yes'):
                shutil.copy(env_example, env_file)
                ok("Created .env from .env.example")
                warn("Please edit .env and add DISCORD_TOKEN and GEMINI_API_KEY, then restart!")
                return False, ["new .env created - needs editing"]
        except (EOFError, KeyboardInterrupt):
            pass

    fail(".env file missing!")
    return False, ["missing .env"]


def check_discord_token() -> Tuple[bool, List[str]]:
    """Check the Discord token is present and roughly token-shaped."""
    token = os.getenv("DISCORD_TOKEN")

    if not token:
        fail("DISCORD_TOKEN not set!")
        return False, ["missing DISCORD_TOKEN"]
    if len(token) > 50 and '.' in token:
        ok("DISCORD_TOKEN is set")
        return True, []
    warn("DISCORD_TOKEN looks invalid (too short or wrong format)")
    return False, ["DISCORD_TOKEN looks invalid"]


def check_gemini_key() -> Tuple[bool, List[str]]:
    """Check the Gemini API key is present."""
    if os.getenv("GEMINI_API_KEY"):
        ok("GEMINI_API_KEY is set")
        return True, []
    fail("GEMINI_API_KEY not set!")
    return False, ["missing GEMINI_API_KEY"]


def check_channel_registry(path: str) -> Tuple[bool, List[str]]:
    """Check the AI channel registry is readable JSON (absent is fine)."""
    if not os.path.exists(path):
        ok("No AI channels registered yet (use /aichat enable)")
        return True, []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        fail(f"{path} is invalid JSON: {e}")
        return False, [f"invalid {path}"]

    count = sum(len(channels) for channels in data.values())
    ok(f"{count} AI channel(s) registered")
    return True, []


def validate_startup(interactive: bool = True) -> bool:
    """
    Run all startup validation checks.

    Args:
        interactive: If True, prompt user to fix issues. If False, just report.

    Returns:
        True if all checks pass (or only warnings), False otherwise.
    """
    from dotenv import load_dotenv
    load_dotenv()
    from config import AI_CHANNELS_FILE

    print(f"\n{Colors.BOLD}{'='*50}")
    print("Shiva - Startup Validation")
    print(f"{'='*50}{Colors.END}\n")

    checks = [
        ("Configuration Files", lambda: check_env_file(interactive)),
        ("Discord Token", check_discord_token),
        ("Gemini API Key", check_gemini_key),
        ("AI Channel Registry", lambda: check_channel_registry(AI_CHANNELS_FILE)),
    ]

    all_issues = []
    for i, (title, check) in enumerate(checks, 1):
        print(f"{Colors.BOLD}[{i}/{len(checks)}] {title}{Colors.END}")
        _, issues = check()
        all_issues.extend(issues)
        print()

    print(f"{Colors.BOLD}{'='*50}{Colors.END}")

    critical_issues = [i for i in all_issues if 'missing' in i.lower() or 'invalid' in i.lower()]

    if not all_issues:
        print(f"{Colors.OK}{Colors.BOLD}✓ All checks passed! Starting bot...{Colors.END}")
        return True
    elif critical_issues:
        print(f"{Colors.FAIL}{Colors.BOLD}✗ {len(critical_issues)} critical issue(s) found:{Colors.END}")
        for issue in critical_issues:
            print(f"  • {issue}")
        print(f"\n{Colors.WARN}Please fix these issues and try again.{Colors.END}")
        return False
    else:
        print(f"{Colors.WARN}{Colors.BOLD}⚠ {len(all_issues)} warning(s):{Colors.END}")
        for issue in all_issues:
            print(f"  • {issue}")
        print(f"\n{Colors.INFO}Proceeding with warnings...{Colors.END}")
        return True


if __name__ == "__main__":
    # Run standalone validation
    success = validate_startup(interactive=True)
    sys.exit(0 if success else 1)
