from quiz_portal.schemas.quiz import AllowedGroup, QuizView
from quiz_portal.schemas.statistics import StatsFacets
from quiz_portal.helpers.subjects import subject_matches


def group_matches(group: AllowedGroup, facets: StatsFacets) -> bool:
    if facets.department is not None and group.department != facets.department:
        return False
    if facets.year is not None and group.year != facets.year:
        return False
    if facets.semester is not None and group.semester != facets.semester:
        return False
    if facets.section is not None and group.section != facets.section:
        return False
    return True


def quiz_matches_facets(quiz: QuizView, facets: StatsFacets) -> bool:
    """
    Cohort facets must all hold for one and the same allowed group;
    subject is checked against the quiz itself. Unset facets match anything.
    """
    if facets.subject is not None and not subject_matches(quiz.subject, facets.subject):
        return False

    if not facets.has_group_facets:
        return True

    return any(group_matches(group, facets) for group in quiz.allowed_groups)
