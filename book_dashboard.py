#!/usr/bin/env python3
"""Book Dashboard CLI - browse and manage the books collection."""
import argparse
import asyncio
import shlex
import sys
import json
from tabulate import tabulate
from bookdash.client import BooksClient
from bookdash.async_client import AsyncBooksClient
from bookdash.config import Config
from bookdash.dashboard import Dashboard
from bookdash.models import GENRES, STATUSES
from bookdash.notify import Notifier, ERROR
from bookdash.parse import book_to_dict
from bookdash.view import page_window
import logging

logger = logging.getLogger(__name__)


def setup_dashboard(client, args, config: Config) -> Dashboard:
    """Create a dashboard bound to ``client``."""
    page_size = getattr(args, "page_size", None) or config.PAGE_SIZE
    return Dashboard(client, page_size=page_size, notifier=Notifier(config.NOTIFICATION_SECONDS))


def make_client(args, config: Config) -> BooksClient:
    return BooksClient(args.base_url or config.BOOKS_API_URL, timeout=config.DEFAULT_TIMEOUT)


def display_page(dashboard: Dashboard, format_type: str = "table"):
    """Display the current page in the specified format."""
    view = dashboard.view()
    books = view.books

    if format_type == "table":
        headers = ["ID", "Title", "Author", "Genre", "Year", "Status"]
        rows = [
            [
                book.id,
                book.title[:50] + "..." if len(book.title) > 50 else book.title,
                book.author[:30] + "..." if len(book.author) > 30 else book.author,
                book.genre,
                book.published_year,
                book.status
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([book_to_dict(book) for book in books], indent=2))
        return

    elif format_type == "compact":
        for book in books:
            print(f"{book.id}. {book.title} - {book.author} ({book.published_year}, {book.status})")

    print(f"{view.total_matched} books found")
    if view.total_pages > 1:
        first, last = page_window(dashboard.filters.page, dashboard.page_size, view.total_matched)
        print(
            f"Showing {first} to {last} of {view.total_matched} results "
            f"(page {dashboard.filters.page}/{view.total_pages})"
        )


def report(dashboard: Dashboard):
    """Print the pending notification, if any."""
    notification = dashboard.notifier.current()
    if notification is None:
        return
    if notification.kind == ERROR:
        print(f"❌ {notification.message}")
    else:
        print(f"✅ {notification.message}")


def report_form_errors(dashboard: Dashboard):
    for name, message in dashboard.form.errors.items():
        print(f"  {name}: {message}")


def apply_filters(dashboard: Dashboard, args):
    if args.search:
        dashboard.set_search(args.search)
    if args.genre:
        dashboard.set_genre(args.genre)
    if args.status:
        dashboard.set_status(args.status)
    dashboard.go_to_page(args.page)


async def fetch_books_async(args, config: Config):
    """Fetch the collection using the async client."""
    async with AsyncBooksClient(
        args.base_url or config.BOOKS_API_URL,
        timeout=config.DEFAULT_TIMEOUT
    ) as client:
        return await client.list_books()


def show_list(dashboard: Dashboard, args, fetch=None) -> bool:
    if not dashboard.load(fetch):
        report(dashboard)
        return False

    apply_filters(dashboard, args)
    display_page(dashboard, args.format)
    return True


def list_books(args, config: Config) -> bool:
    """List one page of books."""
    if args.use_async:
        # The async client is the only one talking to the server here
        dashboard = setup_dashboard(None, args, config)
        return show_list(dashboard, args, lambda: asyncio.run(fetch_books_async(args, config)))

    with make_client(args, config) as client:
        return show_list(setup_dashboard(client, args, config), args)


def fill_form(dashboard: Dashboard, args):
    fields = {
        "title": args.title,
        "author": args.author,
        "genre": args.genre,
        "publishedYear": args.year,
        "status": args.status,
    }
    for name, value in fields.items():
        if value is not None:
            dashboard.set_field(name, value)


def add_book(args, config: Config) -> bool:
    """Add a new book."""
    with make_client(args, config) as client:
        dashboard = setup_dashboard(client, args, config)
        dashboard.open_form()
        fill_form(dashboard, args)

        book = dashboard.submit()
        if book is None:
            if dashboard.form.errors:
                print("Book not added:")
                report_form_errors(dashboard)
            report(dashboard)
            return False

        report(dashboard)
        print(f"{book.id}. {book.title} - {book.author}")
    return True


def update_book(args, config: Config) -> bool:
    """Edit an existing book."""
    with make_client(args, config) as client:
        dashboard = setup_dashboard(client, args, config)
        if not dashboard.load():
            report(dashboard)
            return False

        try:
            dashboard.edit(args.id)
        except LookupError as e:
            logger.error(str(e))
            return False
        fill_form(dashboard, args)

        book = dashboard.submit()
        if book is None:
            if dashboard.form.errors:
                print("Book not updated:")
                report_form_errors(dashboard)
            report(dashboard)
            return False

        report(dashboard)
    return True


def delete_book(args, config: Config) -> bool:
    """Delete a book after confirmation."""
    with make_client(args, config) as client:
        dashboard = setup_dashboard(client, args, config)
        if not dashboard.load():
            report(dashboard)
            return False

        try:
            book = dashboard.request_delete(args.id)
        except LookupError as e:
            logger.error(str(e))
            return False

        if not args.yes and not confirm(f'Delete "{book.title}"? This action cannot be undone.'):
            dashboard.cancel_delete()
            print("Cancelled")
            return True

        deleted = dashboard.confirm_delete()
        report(dashboard)
    return deleted


def confirm(question: str) -> bool:
    answer = input(f"{question} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


SHELL_HELP = """Commands:
  show                      redraw the current page
  search [TEXT]             filter by title/author (empty clears)
  genre [GENRE]             filter by genre (empty clears)
  status [STATUS]           filter by status (empty clears)
  clear                     clear search and filters
  page N | next | prev      change page
  add                       add a book
  edit ID                   edit a book
  delete ID                 delete a book
  reload                    fetch the collection again
  help | quit
"""


def prompt_form(dashboard: Dashboard):
    """Ask for each form field, keeping the current value on empty input."""
    draft = dashboard.form.draft
    prompts = [
        ("title", "Title", draft.title),
        ("author", "Author", draft.author),
        ("genre", f"Genre ({', '.join(GENRES)})", draft.genre),
        ("publishedYear", "Published year", draft.published_year),
        ("status", f"Status ({'/'.join(STATUSES)})", draft.status),
    ]
    for name, label, current in prompts:
        value = input(f"{label} [{current}]: ").strip()
        if value:
            dashboard.set_field(name, value)


def run_form(dashboard: Dashboard):
    """Prompt until the form is submitted or the user gives up."""
    while True:
        prompt_form(dashboard)
        if dashboard.submit() is not None:
            return
        if dashboard.form.errors:
            report_form_errors(dashboard)
        report(dashboard)
        if not confirm("Try again?"):
            dashboard.close_form()
            return


def run_shell_command(dashboard: Dashboard, command: str, rest: str) -> bool:
    """Execute one shell command. Returns False to leave the shell."""
    if command in ("quit", "exit", "q"):
        return False
    elif command == "help":
        print(SHELL_HELP)
        return True
    elif command == "show":
        pass
    elif command == "search":
        dashboard.set_search(rest)
    elif command == "genre":
        dashboard.set_genre(rest)
    elif command == "status":
        dashboard.set_status(rest)
    elif command == "clear":
        dashboard.clear_filters()
    elif command == "page":
        dashboard.go_to_page(int(rest))
    elif command == "next":
        dashboard.next_page()
    elif command == "prev":
        dashboard.prev_page()
    elif command == "add":
        dashboard.open_form()
        run_form(dashboard)
    elif command == "edit":
        dashboard.edit(rest)
        run_form(dashboard)
    elif command == "delete":
        book = dashboard.request_delete(rest)
        if confirm(f'Delete "{book.title}"? This action cannot be undone.'):
            dashboard.confirm_delete()
        else:
            dashboard.cancel_delete()
    elif command == "reload":
        dashboard.load()
    else:
        print(f"Unknown command: {command} (try 'help')")
        return True

    report(dashboard)
    display_page(dashboard)
    return True


def run_shell(args, config: Config) -> bool:
    """Interactive dashboard keeping filters and page between commands."""
    with make_client(args, config) as client:
        dashboard = setup_dashboard(client, args, config)
        if not dashboard.load():
            report(dashboard)
            return False

        display_page(dashboard)
        print(SHELL_HELP)

        while True:
            try:
                line = input("books> ").strip()
            except EOFError:
                break
            if not line:
                continue

            try:
                parts = shlex.split(line)
                command, rest = parts[0].lower(), " ".join(parts[1:])
                if not run_shell_command(dashboard, command, rest):
                    break
            except (LookupError, ValueError) as e:
                print(f"❌ {e}")
    return True


def main():
    """Main CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    parser = argparse.ArgumentParser(
        description="Book Dashboard - manage the books collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # First page of everything
  %(prog)s list

  # Search and filter
  %(prog)s list --search tolkien --genre Fiction --status Available --page 2

  # Add, edit and delete
  %(prog)s add --title "Dune" --author "Frank Herbert" --genre Sci-Fi --year 1965
  %(prog)s update 5 --status Issued
  %(prog)s delete 5 --yes

  # Interactive dashboard
  %(prog)s shell
        """
    )
    parser.add_argument("--base-url", help="Books API root (default: $BOOKS_API_URL)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # List command
    list_parser = subparsers.add_parser("list", help="List books")
    list_parser.add_argument("--search", default="", help="Match title or author")
    list_parser.add_argument("--genre", choices=GENRES, help="Filter by genre")
    list_parser.add_argument("--status", choices=STATUSES, help="Filter by status")
    list_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    list_parser.add_argument("--page-size", type=int, help="Books per page (default: $PAGE_SIZE)")
    list_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    list_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a book")
    add_parser.add_argument("--title", default="", help="Title")
    add_parser.add_argument("--author", default="", help="Author")
    add_parser.add_argument("--genre", default="", choices=GENRES, help="Genre")
    add_parser.add_argument("--year", default="", help="Published year")
    add_parser.add_argument("--status", default="Available", choices=STATUSES, help="Status")

    # Update command
    update_parser = subparsers.add_parser("update", help="Edit a book")
    update_parser.add_argument("id", help="Book ID")
    update_parser.add_argument("--title", help="New title")
    update_parser.add_argument("--author", help="New author")
    update_parser.add_argument("--genre", choices=GENRES, help="New genre")
    update_parser.add_argument("--year", help="New published year")
    update_parser.add_argument("--status", choices=STATUSES, help="New status")

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a book")
    delete_parser.add_argument("id", help="Book ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    # Shell command
    subparsers.add_parser("shell", help="Interactive dashboard")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()
    commands = {
        "list": list_books,
        "add": add_book,
        "update": update_book,
        "delete": delete_book,
        "shell": run_shell,
    }

    try:
        ok = commands[args.command](args, config)
    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
