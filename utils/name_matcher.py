import unicodedata

EXACT_SCORE = 100
SUBSTRING_SCORE = 75
FUZZY_CEILING = 50


def levenshtein(a, b):
    """
    Edit distance between two strings: the fewest single-character
    insertions, deletions and substitutions turning one into the other.
    """
    rows = len(b) + 1
    cols = len(a) + 1
    table = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = min(
                    table[i - 1][j - 1] + 1,  # substitute
                    table[i][j - 1] + 1,      # insert
                    table[i - 1][j] + 1,      # delete
                )

    return table[rows - 1][cols - 1]


def match_score(name, term):
    """
    Relative match quality of a search term against a student name.
    100 exact, 75 substring, otherwise 50 minus the edit distance (floored at 0).
    An empty term scores 0.
    """
    term = (term or "").lower().strip()
    if not term:
        return 0

    name = (name or "").lower()
    if name == term:
        return EXACT_SCORE
    if term in name:
        return SUBSTRING_SCORE
    return max(0, FUZZY_CEILING - levenshtein(name, term))


def search_tokens(term):
    """Lowercased whitespace-separated tokens of a search box value."""
    return (term or "").lower().split()


def matches_all_tokens(name, tokens):
    """True when every token occurs in the name, ignoring case."""
    name = (name or "").lower()
    return all(t in name for t in tokens)


def collation_key(name):
    """Sort key that orders accented letters with their base letter, ignoring case."""
    decomposed = unicodedata.normalize("NFKD", name or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
