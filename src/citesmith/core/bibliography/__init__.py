"""Bibliography database access and reference list construction.

Architecture
: `BibliographyCollection` loads BibTeX files through pybtex, merges
  duplicate definitions, and hands out private `ReferenceEntry` copies so a
  renderer may annotate an entry without affecting later citations.
: `BibliographyBuilder` turns the ordered cited keys into the reference list
  shown at the end of a document.

Usage Example

```pycon
>>> from citesmith.core.bibliography import BibliographyCollection
>>> from pybtex.database import parse_string
>>> collection = BibliographyCollection()
>>> payload = \"\"\"@book{smith10,
...   author = {Smith, D.},
...   title = {Book Title},
...   year = {2010},
... }\"\"\"
>>> collection.load_data(parse_string(payload, "bibtex"), source="inline.bib")
>>> collection.lookup("smith10").year
'2010'
```
"""

from __future__ import annotations

from .builder import BibliographyBuilder
from .collection import BibliographyCollection, ReferenceEntry
from .issues import BibliographyIssue


__all__ = [
    "BibliographyBuilder",
    "BibliographyCollection",
    "BibliographyIssue",
    "ReferenceEntry",
]
