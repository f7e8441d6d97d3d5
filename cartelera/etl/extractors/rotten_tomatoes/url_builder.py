"""Rotten Tomatoes URL builder.

Generates URL variants for movie and series pages based on title
and year, handling RT's inconsistent slug formats.
"""

import re

from unidecode import unidecode

from cartelera.etl.aggregation.schemas import MediaType


class RTUrlBuilder:
    """Builds and generates URL variants for Rotten Tomatoes."""

    BASE_URL = "https://www.rottentomatoes.com"

    ROMAN_NUMERALS = {
        "ii": "2",
        "iii": "3",
        "iv": "4",
        "v": "5",
        "vi": "6",
        "vii": "7",
        "viii": "8",
    }

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")

    # -------------------------------------------------------------------------
    # Slug Generation
    # -------------------------------------------------------------------------

    @staticmethod
    def build_slug(title: str, keep_article: bool = False) -> str:
        """Build basic slug from title.

        RT uses underscores, lowercase, no special chars.

        Args:
            title: Title.
            keep_article: Keep a leading "the/a/an".

        Returns:
            URL slug (without /m/ or /tv/ prefix).
        """
        slug = unidecode(title).lower()

        if not keep_article:
            slug = re.sub(r"^(the|a|an)\s+", "", slug)

        slug = slug.replace("'", "")
        slug = slug.replace("&", "and")
        slug = re.sub(r"[^\w\s-]", "", slug)
        slug = re.sub(r"[-\s]+", "_", slug)
        slug = re.sub(r"_+", "_", slug)

        return slug.strip("_")

    @staticmethod
    def path_prefix(media_type: MediaType) -> str:
        """"/tv" for series, "/m" otherwise."""
        return "/tv" if media_type == MediaType.SERIES else "/m"

    def build_full_url(self, relative_url: str) -> str:
        """Build full URL from relative path.

        Args:
            relative_url: Relative URL starting with /.

        Returns:
            Complete URL.
        """
        if relative_url.startswith("http"):
            return relative_url
        return f"{self.base_url}{relative_url}"

    # -------------------------------------------------------------------------
    # URL Variants
    # -------------------------------------------------------------------------

    def generate_url_variants(
        self,
        title: str,
        year: int | None = None,
        media_type: MediaType = MediaType.MOVIE,
    ) -> list[str]:
        """Generate multiple URL variants for fallback attempts.

        RT uses inconsistent slug formats:
        - /m/alien_covenant
        - /m/alien_covenant_2017
        - /m/the_batman
        - /tv/the_bear

        Args:
            title: Title.
            year: Optional release year.
            media_type: MOVIE or SERIES.

        Returns:
            List of relative URLs to try, most likely first.
        """
        prefix = self.path_prefix(media_type)
        base_slug = self.build_slug(title)
        variants: list[str] = [f"{prefix}/{base_slug}"]

        if year:
            variants.append(f"{prefix}/{base_slug}_{year}")

        # Keep "the" prefix
        if re.match(r"^(the|a|an)\s+", title.lower()):
            slug_with_article = self.build_slug(title, keep_article=True)
            variants.append(f"{prefix}/{slug_with_article}")
            if year:
                variants.append(f"{prefix}/{slug_with_article}_{year}")

        # Roman numerals to digits
        parts = base_slug.split("_")
        if any(p in self.ROMAN_NUMERALS for p in parts):
            digits = "_".join(self.ROMAN_NUMERALS.get(p, p) for p in parts)
            variants.append(f"{prefix}/{digits}")

        return list(dict.fromkeys(v for v in variants if not v.endswith("/")))

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def extract_slug(url: str) -> str | None:
        """Extract slug from a movie or series URL.

        Args:
            url: Page URL.

        Returns:
            Slug or None if invalid.
        """
        match = re.search(r"/(?:m|tv)/([^/?#]+)", url)
        return match.group(1) if match else None
