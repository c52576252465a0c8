"""
Terminal swipe client: fetch the feed once, then like/pass through it.

Run with: python swipe.py [--lat 37.7749 --lng -122.4194 --min-rating 4]

Keys: r / like = like, l / pass = pass, q = quit
"""
import argparse
import asyncio

from dotenv import load_dotenv

# Load .env into the process environment before app settings are built
load_dotenv()

from app.core.config import settings  # noqa: E402
from app.schemas.places import RestaurantRecord  # noqa: E402
from app.seed.fallback_restaurants import is_placeholder_photo  # noqa: E402
from app.services.feed_service import FeedQueryError, build_feed_service, parse_feed_query  # noqa: E402
from app.services.swipe_session import Action, Gesture, SwipeSession  # noqa: E402

DEFAULT_LAT = "37.7749"
DEFAULT_LNG = "-122.4194"

# Keyboard input -> the same signals the touch UI emits
INPUT_SIGNALS = {
    "r": Gesture.SWIPE_RIGHT,
    "l": Gesture.SWIPE_LEFT,
    "like": Action.LIKE,
    "pass": Action.PASS,
}


def format_card(record: RestaurantRecord) -> str:
    """Render one restaurant as a text card."""
    photo_ref = record.photos[0].photo_reference if record.photos else None
    if photo_ref is None:
        photo_line = "[no photo]"
    elif is_placeholder_photo(photo_ref):
        photo_line = f"[{record.name} photo]"
    else:
        photo_line = f"[photo {photo_ref[:12]}...]"

    rating = f"{record.rating} ★" if record.rating is not None else "not rated"
    price = "$" * record.price_level if record.price_level else "not specified"
    return "\n".join([
        photo_line,
        record.name,
        f"Rating: {rating}",
        record.vicinity or "",
        f"Price: {price}",
    ])


def run_session(session: SwipeSession, read=input, write=print) -> SwipeSession:
    """Drive a loaded session from line input until exhausted or quit."""
    while session.has_current:
        write("")
        write(format_card(session.current()))
        try:
            choice = read("[r]ight=like  [l]eft=pass  [q]uit > ").strip().lower()
        except EOFError:
            # Ctrl-D quits like q
            break
        if choice == "q":
            break
        signal = INPUT_SIGNALS.get(choice)
        if signal is None:
            write(f"Unknown choice: {choice!r}")
            continue
        if isinstance(signal, Gesture):
            session.handle_gesture(signal)
        else:
            session.handle_action(signal)

    if not session.has_current:
        write("\nNo more restaurants!")
    if session.accepted:
        write("\nLiked Restaurants:")
        for record in session.accepted:
            write(f"- {record.name}")
    return session


def main():
    """Fetch the feed and start swiping."""
    parser = argparse.ArgumentParser(description="Swipe through nearby restaurants")
    parser.add_argument("--lat", default=DEFAULT_LAT)
    parser.add_argument("--lng", default=DEFAULT_LNG)
    parser.add_argument("--min-rating", default=None)
    args = parser.parse_args()

    try:
        query = parse_feed_query(args.lat, args.lng, args.min_rating)
    except FeedQueryError as e:
        parser.error(str(e))
    print("Finding delicious restaurants...")
    feed = asyncio.run(build_feed_service(settings).get_feed(query))

    run_session(SwipeSession(feed.results))


if __name__ == "__main__":
    main()
