"""Upload pipeline: resolve the project, create keys, attach translations."""

import enum
import logging
from dataclasses import dataclass, field
from typing import Protocol

from phrase_upload.client import Locale, PhraseClient, Project, RemoteKey, parse_object
from phrase_upload.records import PendingRecord
from phrase_upload.resolver import find_locale, find_project

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """Receives one ``advance`` per uploaded translation, then ``finish``."""

    def advance(self) -> None: ...

    def finish(self) -> None: ...


class NullProgress:
    """Progress sink that ignores every update."""

    def advance(self) -> None:
        pass

    def finish(self) -> None:
        pass


class UploadState(enum.Enum):
    INIT = "init"
    RESOLVED = "resolved"
    KEYS_CREATED = "keys_created"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


CreatedKey = tuple[RemoteKey, str]


def keys_path(project: Project) -> str:
    return f"/api/v2/projects/{project.id}/keys"


def translations_path(project: Project) -> str:
    return f"/api/v2/projects/{project.id}/translations"


def create_key(
    client: PhraseClient, project: Project, record: PendingRecord
) -> CreatedKey:
    """Create the remote key for ``record`` and pair it with its value."""
    path = keys_path(project)
    data = client.post_json(path, [("name", record.key)])
    remote_key: RemoteKey = parse_object(path, data, RemoteKey)
    return remote_key, record.value


def upload_translation(
    client: PhraseClient,
    project: Project,
    locale: Locale,
    created: CreatedKey,
) -> None:
    """Attach ``content`` to a created key in the given locale."""
    remote_key, content = created
    params = [
        ("locale_id", locale.id),
        ("key_id", remote_key.id),
        ("content", content),
    ]
    client.post(translations_path(project), params)


@dataclass
class UploadRun:
    """Drives one upload from name resolution to the last translation.

    The run moves through ``INIT -> RESOLVED -> KEYS_CREATED -> SUCCEEDED``.
    The first error moves it to ``FAILED``, is stored on ``error`` and is
    re-raised. Keys created before a failure are left on Phrase.
    """

    client: PhraseClient
    project_name: str
    locale_name: str
    progress: ProgressSink = field(default_factory=NullProgress)
    state: UploadState = UploadState.INIT
    error: Exception | None = None
    project: Project | None = None
    locale: Locale | None = None
    created_keys: list[CreatedKey] = field(default_factory=list)
    uploaded: int = 0

    def run(self, records: list[PendingRecord]) -> None:
        try:
            self._resolve()
            self._create_keys(records)
            self._upload_translations()
        except Exception as e:
            self.state = UploadState.FAILED
            self.error = e
            if self.created_keys:
                logger.warning(
                    "Upload stopped after creating %d keys and uploading %d "
                    "translations; created keys are left on Phrase",
                    len(self.created_keys),
                    self.uploaded,
                )
            raise

        self.state = UploadState.SUCCEEDED
        self.progress.finish()
        logger.info("Uploaded %d translations", self.uploaded)

    def _resolve(self) -> None:
        self.project = find_project(self.client, self.project_name)
        self.locale = find_locale(self.client, self.project, self.locale_name)
        self.state = UploadState.RESOLVED
        logger.info(
            "Using project %s (%s), locale %s (%s)",
            self.project.name,
            self.project.id,
            self.locale.name,
            self.locale.id,
        )

    def _create_keys(self, records: list[PendingRecord]) -> None:
        for record in records:
            self.created_keys.append(create_key(self.client, self.project, record))
            logger.debug("Created key %s", record.key)
        self.state = UploadState.KEYS_CREATED
        logger.info("Created %d keys", len(self.created_keys))

    def _upload_translations(self) -> None:
        for created in self.created_keys:
            upload_translation(self.client, self.project, self.locale, created)
            self.uploaded += 1
            self.progress.advance()


def upload_records(
    client: PhraseClient,
    records: list[PendingRecord],
    project_name: str,
    locale_name: str,
    progress: ProgressSink | None = None,
) -> UploadRun:
    """Upload ``records`` into the named project and locale.

    Args:
        client: Authenticated Phrase client.
        records: Parsed records, uploaded in order.
        project_name: Exact name of the Phrase project.
        locale_name: Exact name of the locale inside that project.
        progress: Sink advanced once per uploaded translation.

    Returns:
        The finished ``UploadRun``.

    Raises:
        PhraseUploadError: On the first failed lookup or request.
    """
    upload = UploadRun(
        client=client,
        project_name=project_name,
        locale_name=locale_name,
        progress=progress or NullProgress(),
    )
    upload.run(records)
    return upload
