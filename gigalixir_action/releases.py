from .gigalixir import GigalixirSession


def get_current_release(session: GigalixirSession, app: str) -> int:
    """Version of the most recent release, or 0 before the first deploy."""
    releases = session.list_releases(app)
    return releases[0].version if releases else 0


def format_release_message(release: int) -> str:
    if release:
        return f"The current release is {release}"
    return "This is the first release"
