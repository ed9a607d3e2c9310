"""Look up Phrase projects and locales by their display name."""

import logging

from phrase_upload.client import Locale, PhraseClient, Project, parse_list
from phrase_upload.errors import LocaleNotFoundError, ProjectNotFoundError

logger = logging.getLogger(__name__)

PROJECTS_PATH = "/api/v2/projects"


def locales_path(project: Project) -> str:
    return f"/api/v2/projects/{project.id}/locales"


def find_project(client: PhraseClient, name: str) -> Project:
    """Return the first project whose name is exactly ``name``.

    Raises:
        ProjectNotFoundError: If no project has that name.
    """
    projects: list[Project] = parse_list(
        PROJECTS_PATH, client.get_json(PROJECTS_PATH), Project
    )

    for project in projects:
        if project.name == name:
            logger.debug("Resolved project %s -> %s", name, project.id)
            return project

    raise ProjectNotFoundError(name)


def find_locale(client: PhraseClient, project: Project, name: str) -> Locale:
    """Return the first locale of ``project`` whose name is exactly ``name``.

    Raises:
        LocaleNotFoundError: If the project has no locale with that name.
    """
    path = locales_path(project)
    locales: list[Locale] = parse_list(path, client.get_json(path), Locale)

    for locale in locales:
        if locale.name == name:
            logger.debug("Resolved locale %s -> %s", name, locale.id)
            return locale

    raise LocaleNotFoundError(name)
