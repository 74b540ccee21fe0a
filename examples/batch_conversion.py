import json

from tooltailor import ConversionOptions, Converter, SchemaTool


class Catalogue:
    """Search and reserve books in the library catalogue."""

    def __init__(self, *, branch):
        """
        @param branch [String] The library branch to work with.
        @values branch ["central", "north", "harbour"]
        """
        self.branch = branch

    @SchemaTool
    def search(self, *, query, genres=None, limit=10):
        """Search the catalogue.

        @param query [String] Free text search.
        @param genres [Array] Genres to filter on.
        @items_type genres String
        @max_items genres 5
        @param limit [Integer] Maximum number of results.
        """
        return []


# Reserve a copy of a book for pickup.
#
# @param isbn [String] The ISBN-13 of the book.
def reserve(*, isbn):
    return isbn


def lend(isbn):
    return isbn


converter = Converter(ConversionOptions(log_level="debug"))

outcomes = converter.batch_convert(
    [Catalogue, Catalogue.search, reserve, lend],
    format="dict",
    on_error="collect",
)

for outcome in outcomes:
    if outcome.ok:
        print(json.dumps(outcome.schema, indent=2))
    else:
        print(f"Skipped {outcome.target!r}: {outcome.error}")

print(Catalogue(branch="north").search.to_schema())
