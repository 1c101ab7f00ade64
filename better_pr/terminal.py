"""Terminal output: colors, icons, hyperlinks and the printed report."""

from typing import Iterable

from .classifier import APPROVALS_NEEDED, DEFICIENT, SATISFIED, ClassifiedPR
from .models import Bucket, Counts


# ANSI color codes
RED = '\033[91m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
MAGENTA = '\033[95m'
CYAN = '\033[96m'
WHITE = '\033[97m'
BOLD = '\033[1m'
ITALIC = '\033[3m'
RESET = '\033[0m'

# OSC 8 hyperlinks
OSC = '\033]'
BEL = '\007'


def paint(text: str, *codes: str) -> str:
    return f"{''.join(codes)}{text}{RESET}"


def red_ex() -> str:
    return paint('✖', RED)


def green_check() -> str:
    return paint('✔', GREEN)


def magenta_question() -> str:
    return paint('?', MAGENTA)


def blue_circle() -> str:
    return paint('●', BLUE)


def white_ellipsis() -> str:
    return paint('…', WHITE)


def yellow_tri() -> str:
    return paint('▲', YELLOW)


BUCKET_ICONS = {
    Bucket.REVIEWER_UNAPPROVED: red_ex,
    Bucket.REVIEWER_APPROVED: green_check,
    Bucket.NOT_REVIEWER: magenta_question,
    Bucket.AUTHOR: blue_circle,
    Bucket.WIP: white_ellipsis,
}

BUCKET_LABELS = {
    Bucket.REVIEWER_UNAPPROVED: 'Needs your review',
    Bucket.REVIEWER_APPROVED: 'Approved by you',
    Bucket.NOT_REVIEWER: 'Not a reviewer',
    Bucket.AUTHOR: 'Authored by you',
    Bucket.WIP: 'Work in progress',
}

CHANGES_REQUESTED_LABEL = 'Changes requested'

APPROVAL_COLORS = {
    DEFICIENT: RED,
    SATISFIED: GREEN,
}

BANNER = [
    (RED, "   ___      __  __          ___  ___ "),
    (YELLOW, "  / _ )___ / /_/ /____ ____/ _ \\/ _ \\"),
    (GREEN, " / _  / -_) __/ __/ -_) __/ ___/ , _/"),
    (CYAN, "/____/\\__/\\__/\\__/\\__/_/ /_/  /_/|_| \n"),
]


def make_link(text: str, url: str) -> str:
    """Wrap text in an OSC 8 hyperlink escape sequence."""
    return f"{OSC}8;;{url}{BEL}{text}{OSC}8;;{BEL}"


def error_message(message: str):
    print(f"{paint('Error:', RED, BOLD)} {message}")


def success_message(label: str, value: str = ''):
    print(f"{green_check()} {paint(label, WHITE, BOLD)}{' ' + value if value else ''}")


def print_banner(version: str, author: str):
    print(paint("Welcome to:", WHITE, ITALIC))
    for color, line in BANNER:
        print(paint(line, color))
    print(f"{' ' * 7}{paint(f'v{version}', MAGENTA, ITALIC)}{paint(' by ', WHITE, ITALIC)}{paint(author, BLUE, ITALIC)}")


def print_update_notice(current: str, latest: str):
    print(f"\n{yellow_tri()} {paint('Update available:', YELLOW, BOLD)} {current} → {paint(latest, GREEN)}")
    print(paint("  Run: pip install --upgrade better-pr", ITALIC))


def print_repository_header(name: str):
    print(f"\n{paint('[Open] ', GREEN, BOLD)}{BOLD}{WHITE}PRs for {ITALIC}{name}{RESET}")


def print_no_open_prs():
    print(paint("No open PRs! 🎉", ITALIC))


def print_loading(count: int):
    print(paint(f"Loading {count} PRs...", MAGENTA, ITALIC), flush=True)


def format_approvals(item: ClassifiedPR, approvals_needed: int = APPROVALS_NEEDED) -> str:
    text = f"[{item.approved_count}/{approvals_needed}]"
    return paint(text, APPROVAL_COLORS.get(item.approval_style, YELLOW))


def format_pr_line(item: ClassifiedPR) -> str:
    """Render one classified pull request.

    The changes requested marker takes the first column; lines without it
    are padded so the bucket icons stay aligned.
    """
    marker = yellow_tri() if item.changes_requested else ' '
    icon = BUCKET_ICONS[item.bucket]()
    return f"{marker} {icon} {format_approvals(item)} {make_link(item.pr.title, item.pr.url)}"


def print_pull_requests(items: Iterable[ClassifiedPR]):
    print()
    for item in items:
        print(format_pr_line(item))


def print_totals(counts: Counts):
    """Print the per bucket totals of the run followed by the legend."""
    print(f"\n{paint('Totals', WHITE, BOLD)}")
    for bucket in counts:
        print(f"  {BUCKET_ICONS[bucket]()} {counts[bucket]:>4}  {BUCKET_LABELS[bucket]}")
    # Legend only, the marker is not a bucket and is never counted
    print(f"  {yellow_tri()} {0:>4}  {CHANGES_REQUESTED_LABEL}")


def say_goodbye():
    print(paint("\nGoodbye!", WHITE, ITALIC), red_ex(), yellow_tri(), green_check(),
          blue_circle(), magenta_question())
