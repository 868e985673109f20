"""
pncengine CLI - Command-line interface for the engine.

Usage:
    pncengine validate <game_file>     Validate a game description (.xml or .json)
    pncengine play [game_file]         Play in the terminal (built-in game if no file)
    pncengine serve                    Run the HTTP API with uvicorn

In `play`, the canvas is replaced by typed commands:
    look            Describe the location, items and inventory
    click X Y       Click on the canvas at (X, Y)
    inv             List the inventory and the selected item
    select ID       Select an inventory item (or use the selected one on it)
    use ID          Use the selected item on inventory item ID
    save SLOT       Save progress
    load SLOT       Restore progress
    quit            Leave the game
"""

import argparse
import logging
import os
import sys

logger = logging.getLogger(__name__)

PROMPT = "> "


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="pncengine - Point-and-click adventure engine",
        prog="pncengine",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("PNC_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $PNC_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a game description")
    validate_parser.add_argument("game_file", help="Path to .xml or .json game description")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("game_file", nargs="?", help="Path to game description")
    play_parser.add_argument("--save-dir", help="Directory for save slots")
    play_parser.add_argument(
        "--lenient", action="store_true",
        help="Treat unbound item interactions as 'nothing happened'",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "play":
        return cmd_play(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def cmd_validate(args) -> int:
    """Validate a game description."""
    from .exceptions import ContentLoadError
    from .spec_schema import load_description, validate_description

    print(f"Validating: {args.game_file}")
    try:
        description = load_description(args.game_file)
    except ContentLoadError as e:
        print(f"Error: {e}")
        return 1

    result = validate_description(description)
    print(f"Game: {description.title}")
    print(f"Locations: {len(description.locations)}")
    print(f"Items: {len(description.all_items())}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")
        return 1

    print("\nOK")
    return 0


def cmd_play(args) -> int:
    """Play a game in the terminal."""
    from .engine_core.persistence import SaveStore
    from .exceptions import ContentAuthoringError, ContentLoadError, DescriptionValidationError
    from .session import SessionManager
    from .spec_schema import load_description

    strict = not args.lenient
    manager = SessionManager(strict_content=strict)
    try:
        if args.game_file:
            session = manager.create_session(load_description(args.game_file))
        else:
            from .games.demo import DEMO_CUSTOM_EFFECTS, DEMO_INTERACTIONS, create_demo_description
            session = manager.create_session(
                create_demo_description(),
                custom_effects=DEMO_CUSTOM_EFFECTS,
                interactions=DEMO_INTERACTIONS,
            )
    except DescriptionValidationError as e:
        print("Error: the game description is invalid")
        for error in e.errors:
            print(f"  - {error}")
        return 1
    except (ContentLoadError, ContentAuthoringError) as e:
        print(f"Error: {e}")
        return 1

    repl = PlayLoop(manager, session, SaveStore(save_dir=args.save_dir))
    repl.run()
    return 0


def cmd_serve(args) -> int:
    """Run the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        print("uvicorn not installed. Install with: pip install 'pncengine[serve]'")
        return 1

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


class PlayLoop:
    """
    Text front end for one session.

    Stands in for the renderer: prints the handed-off messages and audio cues
    after every command, and describes the location when a redraw is due.
    """

    def __init__(self, manager, session, save_store, read=input, write=print):
        from .engine_core.reducer import Reducer

        self.manager = manager
        self.session = session
        self.save_store = save_store
        self.reducer = Reducer()
        self.read = read
        self.write = write

    @property
    def game(self):
        return self.session.game

    def run(self):
        self.write(self.game.title)
        self.write("=" * len(self.game.title))
        self.flush_messages()
        self.look()
        while True:
            try:
                line = self.read(PROMPT)
            except EOFError:
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the player quits."""
        from .engine_core.action import Action
        from .exceptions import ContentAuthoringError, SaveDataError, UnknownLocationError

        words = line.split()
        if not words:
            return True
        command, rest = words[0].lower(), words[1:]

        try:
            if command in {"quit", "exit"}:
                return False
            elif command == "look":
                self.look()
            elif command == "inv":
                self.show_inventory()
            elif command == "click" and len(rest) == 2:
                self.apply(Action.click(float(rest[0]), float(rest[1])))
            elif command == "select" and len(rest) == 1:
                self.apply(Action.inventory_click(int(rest[0]), self.game.active_item))
            elif command == "use" and len(rest) == 1:
                self.apply(Action.use_item(int(rest[0])))
            elif command == "save" and len(rest) == 1:
                self.save_store.save(rest[0], self.game)
                self.write(f"Saved to slot '{rest[0]}'.")
            elif command == "load" and len(rest) == 1:
                self.load(rest[0])
            else:
                self.write("Commands: look, click X Y, inv, select ID, use ID, save SLOT, load SLOT, quit")
        except ValueError:
            self.write("Coordinates and item ids must be numbers.")
        except SaveDataError as e:
            self.write(f"Cannot use that save: {e}")
        except (ContentAuthoringError, UnknownLocationError) as e:
            logger.error("Content error: %s", e)
            self.write(f"Content error: {e}")
            self.flush_messages()
        return True

    def apply(self, action):
        result = self.manager.run(self.session, lambda game: self.reducer.apply(game, action))
        for message in result.messages:
            self.write(message)
        for src in result.audio_cues:
            self.write(f"[audio: {src}]")
        if not result.success:
            self.write(f"({result.error})")
        if result.redraw_needed:
            self.look()

    def load(self, slot: str):
        def restore(game):
            fresh = self.manager.rebuild_game(self.session)
            fresh.take_messages()
            self.save_store.load(slot, fresh)
            self.session.game = fresh

        self.manager.run(self.session, restore)
        self.write(f"Loaded slot '{slot}'.")
        self.look()

    def look(self):
        game = self.game
        location = game.current_location
        self.write(f"\n[{location.id}] {location.description}")
        for item in game.location_inventory_snapshot(location.id):
            self.write(f"  You see: {item.description} ({item.id})")
        for event in game.available_events_at(location.id):
            region = event.hit_region
            where = "anywhere" if region.is_default else f"{region.shape.value} {list(region.coords)}"
            self.write(f"  - {event.description}: {where}")
        game.clear_redraw()

    def show_inventory(self):
        items = self.game.player_inventory_snapshot()
        if not items:
            self.write("You are carrying nothing.")
        for item in items:
            marker = "*" if item.id == self.game.active_item else " "
            self.write(f" {marker} {item.id}: {item.description}")

    def flush_messages(self):
        for message in self.game.take_messages():
            self.write(message)
        self.game.take_audio_cues()


if __name__ == "__main__":
    sys.exit(main())
