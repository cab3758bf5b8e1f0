"""
Simple CRUD Blog

This is the main entry point for the blog client.
It signs the user in (optionally), then lists, views, creates, updates
and deletes blog posts through the hosted GraphQL API.
"""

import sys
import cmd
import argparse
import getpass
import logging
import shlex
from typing import Optional

from config import settings
from config.validators import validate_settings, get_config_summary
from services.auth_service import AuthService
from services.blog_service import BlogService
from services.graphql_client import GraphQLClient
from services.post_repository import PostRepository
from utils.exceptions import BlogError, NotAuthenticatedError
from utils.formatting import render_state, render_detail, render_card
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)


def create_blog_service(repository=None, auth=None) -> BlogService:
    """
    Build a BlogService wired to the configured backend.

    Args:
        repository: Optional PostStore to use instead of the GraphQL repository
        auth: Optional AuthProvider to use instead of the Cognito service

    Returns:
        BlogService: A service holding an empty, anonymous state
    """
    if repository is None:
        repository = PostRepository(GraphQLClient())
    if auth is None:
        auth = AuthService()
    return BlogService(repository, auth)


class BlogShell(cmd.Cmd):
    """Interactive shell keeping the application state for the whole session."""

    intro = "Simple CRUD Blog. Type help or ? to list commands."
    prompt = "(blog) "

    def __init__(self, service: BlogService, **kwargs):
        super().__init__(**kwargs)
        self.service = service

    def _show(self) -> None:
        self.stdout.write(render_state(self.service.state, self.service.can_modify) + "\n")

    def _post(self, arg: str):
        post_id = arg.strip()
        post = self.service.get_post(post_id) if post_id else None
        if post is None:
            self.stdout.write(f"No blog post with id '{post_id}'\n")
        return post

    def onecmd(self, line):
        try:
            return super().onecmd(line)
        except NotAuthenticatedError as e:
            self.stdout.write(f"{e}\n")
            return False

    def emptyline(self):
        return False

    def preloop(self):
        self.service.refresh()
        self._show()

    def do_list(self, arg):
        """list: re-fetch and show all blog posts"""
        self.service.refresh()
        self._show()

    def do_view(self, arg):
        """view ID: show a blog post in full"""
        post = self._post(arg)
        if post is not None:
            self.service.view(post)
            self.stdout.write(render_detail(self.service.state.viewed) + "\n")

    def do_close(self, arg):
        """close: clear the detail pane"""
        self.service.close_view()

    def do_title(self, arg):
        """title TEXT: set the title being edited"""
        self.service.edit_title(arg)

    def do_content(self, arg):
        """content TEXT: set the content being edited"""
        self.service.edit_content(arg)

    def do_edit(self, arg):
        """edit ID: start updating one of your blog posts"""
        post = self._post(arg)
        if post is not None:
            self.service.start_update(post)
            self._show()

    def do_cancel(self, arg):
        """cancel: abandon the update in progress"""
        self.service.cancel_update()

    def do_submit(self, arg):
        """submit: create or update a blog post from the edit buffer"""
        self.service.submit()
        self._show()

    def do_delete(self, arg):
        """delete ID: delete one of your blog posts"""
        post = self._post(arg)
        if post is not None:
            self.service.delete(post)
            self._show()

    def do_login(self, arg):
        """login USERNAME: sign in"""
        try:
            args = shlex.split(arg)
        except ValueError as e:
            self.stdout.write(f"Usage: login USERNAME ({e})\n")
            return
        username = args[0] if args else input("Username: ")
        password = getpass.getpass("Password: ")
        try:
            self.service.sign_in(username, password)
        except BlogError as e:
            self.stdout.write(f"{e}\n")
            return
        self.service.refresh()
        self._show()

    def do_logout(self, arg):
        """logout: sign out"""
        self.service.sign_out()
        self.service.refresh()
        self._show()

    def do_quit(self, arg):
        """quit: leave the shell"""
        return True

    do_EOF = do_quit


def run_command(service: BlogService, args) -> bool:
    """
    Run a single non-interactive command.

    Returns:
        bool: True if successful, False otherwise
    """
    if not service.refresh():
        print(f"Error: {service.state.error}")
        return False

    if args.command == "list":
        print(render_state(service.state, service.can_modify))
        return True

    if args.command == "create":
        ok = service.create(args.title, args.content)
        if not ok and service.state.error is None:
            print("Error: title and content are both required")
        return _report(service, ok)

    post = service.get_post(args.id)
    if post is None:
        print(f"Error: no blog post with id '{args.id}'")
        return False

    if args.command == "view":
        service.view(post)
        print(render_detail(service.state.viewed))
        return True

    if args.command == "update":
        title = args.title if args.title is not None else post.title
        content = args.content if args.content is not None else post.content
        return _report(service, service.update(post, title, content))

    if args.command == "delete":
        return _report(service, service.delete(post))

    raise ValueError(f"Unknown command: {args.command}")


def _report(service: BlogService, ok: bool) -> bool:
    if service.state.error:
        # A mutation can succeed while the follow-up re-fetch fails
        if ok:
            print("Change saved, but the list could not be reloaded")
        print(f"Error: {service.state.error}")
        return False
    if not ok:
        return False
    for post in service.state.visible_posts:
        print(render_card(post))
    return True


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Simple CRUD Blog')
    parser.add_argument('--username', type=str, default=None, help='Sign in as this user')
    parser.add_argument('--password', type=str, default=None, help='Password (prompted if omitted)')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='WARNING', help='Logging level')

    subparsers = parser.add_subparsers(dest='command')
    subparsers.add_parser('list', help='List all blog posts')
    subparsers.add_parser('shell', help='Interactive mode')

    view = subparsers.add_parser('view', help='Show one blog post in full')
    view.add_argument('id')

    create = subparsers.add_parser('create', help='Create a blog post')
    create.add_argument('--title', required=True)
    create.add_argument('--content', required=True)

    update = subparsers.add_parser('update', help='Update one of your blog posts')
    update.add_argument('id')
    update.add_argument('--title', default=None)
    update.add_argument('--content', default=None)

    delete = subparsers.add_parser('delete', help='Delete one of your blog posts')
    delete.add_argument('id')

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = 'shell'
    return args


def main(argv=None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    username: Optional[str] = args.username or settings.BLOG_USERNAME
    password: Optional[str] = args.password or settings.BLOG_PASSWORD

    logger.info("Starting blog client")

    service = None
    try:
        validate_settings(require_auth=bool(username))
        logger.debug(f"Configuration: {get_config_summary()}")

        service = create_blog_service()

        if username:
            if not password:
                password = getpass.getpass(f"Password for {username}: ")
            service.sign_in(username, password)

        if args.command == 'shell':
            BlogShell(service).cmdloop()
            exit_code = 0
        else:
            exit_code = 0 if run_command(service, args) else 1

    except NotAuthenticatedError as e:
        print(f"Error: {e}")
        exit_code = 1
    except BlogError as e:
        logger.error(f"Blog client error: {e}")
        print(f"Error: {e}")
        exit_code = 1
    except Exception as e:
        logger.error(f"Unhandled exception in blog client: {e}", exc_info=True)
        exit_code = 2
    finally:
        if service is not None:
            service.close()

    logger.info(f"Blog client finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
