#!/usr/bin/env python3
"""Interactive chat CLI for testing the HR agent service."""

import sys

import httpx
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt


class ChatCLI:
    """Interactive chat interface for the HR agent service."""

    def __init__(self, base_url: str = "http://localhost:3000"):
        """Initialize chat CLI."""
        self.base_url = base_url
        self.thread_id: str | None = None
        self.console = Console()
        self.client = httpx.Client(timeout=120.0)

    def start(self) -> None:
        """Start the interactive chat session."""
        self.console.print(
            Panel.fit(
                "[bold blue]HR Agent - Interactive Chat[/bold blue]\n"
                "Type your messages to chat with the HR assistant.\n"
                "Commands: /help, /clear, /quit",
                border_style="blue",
            )
        )

        if not self._test_connection():
            self.console.print(f"[red]Cannot connect to the service at {self.base_url}.[/red]")
            return

        self.console.print("[green]Connected to HR agent service[/green]\n")

        try:
            while True:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")

                if user_input.lower() in ["/quit", "/exit", "quit", "exit"]:
                    break
                elif user_input.lower() == "/help":
                    self._show_help()
                    continue
                elif user_input.lower() == "/clear":
                    self.thread_id = None
                    self.console.print("[yellow]Thread cleared[/yellow]")
                    continue
                elif user_input.strip() == "":
                    continue

                response = self._send_message(user_input)
                if response:
                    self._display_response(response)

        except KeyboardInterrupt:
            pass
        finally:
            self.console.print("\n[yellow]Goodbye![/yellow]")
            self.client.close()

    def _test_connection(self) -> bool:
        """Test connection to the service."""
        try:
            response = self.client.get(f"{self.base_url}/")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def _send_message(self, message: str) -> dict | None:
        """Send a message, starting a new thread if there is none yet."""
        url = f"{self.base_url}/chat/{self.thread_id}" if self.thread_id else f"{self.base_url}/chat"

        try:
            self.console.print("[dim]Thinking...[/dim]", end="")
            response = self.client.post(url, json={"message": message})
            self.console.print("\r" + " " * 20 + "\r", end="\n")

            if response.status_code == 200:
                data = response.json()
                if "threadId" in data:
                    self.thread_id = data["threadId"]
                    self.console.print(f"[dim]Thread: {self.thread_id}[/dim]")
                return data

            self.console.print(f"[red]API Error: {response.status_code} - {response.text}[/red]")
            return None

        except httpx.HTTPError as e:
            self.console.print(f"[red]Connection error: {e}[/red]")
            return None

    def _display_response(self, response: dict) -> None:
        """Display the agent's response."""
        assistant_text = response.get("response", "No response")

        self.console.print(
            Panel(
                Markdown(assistant_text),
                title="[bold green]HR Assistant[/bold green]",
                border_style="green",
                padding=(1, 2),
            )
        )

    def _show_help(self) -> None:
        """Show help information."""
        help_text = """
[bold]Available Commands:[/bold]
• /help - Show this help message
• /clear - Forget the current thread and start a new one
• /quit or /exit - Exit the chat

[bold]Example Conversation:[/bold]
1. "Build a team to make an iOS app, and tell me the talent gaps."
2. "What team members did you recommend?"
        """

        self.console.print(Panel(help_text.strip(), title="[cyan]Help[/cyan]", border_style="cyan"))


def main():
    """Main entry point for the chat CLI."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"

    chat = ChatCLI(base_url)
    chat.start()


if __name__ == "__main__":
    main()
