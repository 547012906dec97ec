"""
Interest catalog for the profile form.

The form offers a base set of interests, extended by age band and, for the
"male"/"female" labels, a few gender-specific additions. The pipeline does
not restrict requests to this catalog; free-text interests are accepted.
"""

from typing import List, Optional

AGE_OPTIONS = list(range(3, 16))
SEX_OPTIONS = ["male", "female", "other"]

BASE_INTERESTS = ["animals", "music", "sports", "art", "science", "cooking"]

YOUNG_CHILD_INTERESTS = ["cartoons", "nursery rhymes", "colors", "shapes", "toys"]  # up to 6
CHILD_INTERESTS = ["cartoons", "games", "adventure", "dinosaurs", "space"]  # 7-10
PRETEEN_INTERESTS = ["technology", "fashion", "movies", "books", "travel"]  # 11+

SEX_INTERESTS = {
    "male": ["cars", "robots", "superheroes"],
    "female": ["dance", "makeup", "princesses"],
}


def get_available_interests(age: Optional[int] = None, sex: Optional[str] = None) -> List[str]:
    """
    Interests to offer for an age and gender label.

    Without an age only the base interests are returned (the form has not
    enough information yet). The result is sorted and has no duplicates.
    """
    if not age:
        return sorted(BASE_INTERESTS)

    interests = list(BASE_INTERESTS)

    if age <= 6:
        interests.extend(YOUNG_CHILD_INTERESTS)
    elif age <= 10:
        interests.extend(CHILD_INTERESTS)
    else:
        interests.extend(PRETEEN_INTERESTS)

    if sex:
        interests.extend(SEX_INTERESTS.get(sex.strip().lower(), []))

    return sorted(set(interests))
