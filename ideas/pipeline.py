"""
Ideas Pipeline - Core execution logic.

This module orchestrates one idea submission end to end:

    Classify → Polish + Translate → Slug → Augment → Assemble → Commit

Steps:
1. Detect the source language of the idea (English or Chinese)
2. Generate a title if none was given
3. Ask the LLM for polished + translated text as JSON; repair and validate it
4. Derive a URL-safe slug from the polished title
5. Use the caller's augmentation block, or ask the LLM for one, and translate it
6. Assemble one Markdown document per language
7. Commit both documents to the content store, native language first

Policy:
- A malformed polish reply is retried MALFORMED_RETRIES times with a stricter
  prompt, then fails the run
- A slug collision (either language path is already taken) moves on to
  slug-2, slug-3, ...
- If the native document is committed and the other is not, the run ends as
  "partial", naming the missing language; retry_missing() writes only that half
- Any other upstream error fails the run with the stage it happened in
- Nothing is retried beyond that; each run shares no state with other runs
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from ideas.config import (
    LLM_BASE_URL,
    LLM_API_KEY,
    LLM_MODEL,
    LLM_TITLE_MODEL,
    GIT_TOKEN,
    GIT_REPO,
    GIT_COMMITTER_NAME,
    GIT_COMMITTER_EMAIL,
    CONTENT_DIR,
    TITLE_TIMEOUT,
    COMPLETION_TIMEOUT,
    AUGMENT_TIMEOUT,
    WRITE_TIMEOUT,
    MALFORMED_RETRIES,
    SLUG_MAX_ATTEMPTS,
    AUGMENT_ENABLED,
)
from ideas.errors import (
    Cancelled,
    IdeasError,
    MalformedResponse,
    PartialCommit,
    UpstreamError,
    ValidationError,
)
from ideas.markdown.assembler import MarkdownAssembler, commit_message
from ideas.models.document import MarkdownDocument
from ideas.models.idea import IdeaSubmission
from ideas.models.language import Language
from ideas.models.result import StructuredResult, parse_structured_result
from ideas.services.llm_client import LLMClient
from ideas.storage.base import ContentStore, WriteResult
from ideas.storage.github import GitHubContentStore
from ideas.storage.memory import MemoryContentStore
from ideas.text.language import detect_language
from ideas.text.slug import slugify, with_suffix

logger = logging.getLogger(__name__)


# =============================================================================
# Pipeline Result Data Structures
# =============================================================================

class Stage(str, Enum):
    """Pipeline states, in order. Any of them can end in PostStatus.FAILED."""

    RECEIVED = "received"
    CLASSIFIED = "classified"
    POLISHED = "polished"
    SLUGGABLE = "sluggable"
    AUGMENTED = "augmented"
    ASSEMBLED = "assembled"
    COMMITTED = "committed"
    DONE = "done"


# Step that runs once a stage is reached; names the failure when the error does not
_STEP_AFTER = {
    Stage.RECEIVED: "classify",
    Stage.CLASSIFIED: "polish",
    Stage.POLISHED: "slug",
    Stage.SLUGGABLE: "augment",
    Stage.AUGMENTED: "commit",
    Stage.ASSEMBLED: "commit",
    Stage.COMMITTED: "commit",
    Stage.DONE: "done",
}


class PostStatus(str, Enum):
    """Final outcome of a post run."""

    DONE = "done"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class PostResult:
    """Complete result of one post run."""
    started_at: datetime
    finished_at: Optional[datetime] = None

    status: PostStatus = PostStatus.FAILED
    # Last stage reached; a failed run keeps the stage it got to
    stage: Stage = Stage.RECEIVED
    # Step that raised, for failed runs (e.g. "polish", "commit")
    failed_step: Optional[str] = None

    lang: Optional[Language] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    slug_attempts: int = 0

    documents: List[MarkdownDocument] = field(default_factory=list)
    committed: List[Language] = field(default_factory=list)
    missing: Optional[Language] = None

    error: Optional[str] = None
    exception: Optional[IdeasError] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.status is PostStatus.DONE

    @property
    def paths(self) -> List[str]:
        return [doc.path for doc in self.documents]

    @property
    def duration_seconds(self) -> float:
        """Total run duration in seconds."""
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0

    def document_for(self, lang: Language) -> Optional[MarkdownDocument]:
        for doc in self.documents:
            if doc.lang == lang:
                return doc
        return None

    def raise_for_status(self) -> None:
        """
        Raise the matching error for a run that did not finish.

        Raises:
            PartialCommit: If one document was committed and the other was not.
            IdeasError: The original error of a failed run.
        """
        if self.status is PostStatus.PARTIAL:
            raise PartialCommit(
                self.error or "partial commit",
                committed=self.committed[0].value,
                missing=self.missing.value,
            )
        if self.status is PostStatus.FAILED:
            raise self.exception or IdeasError(self.error or "post failed")

    def to_response(self) -> Dict:
        """Payload for the HTTP boundary."""
        if self.status is PostStatus.DONE:
            return {
                "ok": True,
                "message": f"posted {self.slug}",
                "slug": self.slug,
                "committed": [lang.value for lang in self.committed],
                "paths": self.paths,
            }
        if self.status is PostStatus.PARTIAL:
            return {
                "ok": False,
                "partial": True,
                "message": self.error,
                "slug": self.slug,
                "committed": [lang.value for lang in self.committed],
                "missing": self.missing.value,
            }
        return {
            "ok": False,
            "message": self.error,
            "stage": self.failed_step or self.stage.value,
            "last_stage": self.stage.value,
        }

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            "=" * 60,
            "IDEA POST SUMMARY",
            "=" * 60,
            f"Started:  {self.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Duration: {self.duration_seconds:.2f}s",
            f"Status:   {self.status.value.upper()} (stage: {self.stage.value})",
        ]

        if self.lang:
            lines.append(f"Language: {self.lang.value}")
        if self.title:
            lines.append(f"Title:    {self.title}")
        if self.slug:
            lines.append(f"Slug:     {self.slug} (attempt {self.slug_attempts})")

        if self.documents:
            lines.extend(["", "Documents:"])
            for doc in self.documents:
                if doc.lang in self.committed:
                    status = "✓"
                elif doc.lang == self.missing:
                    status = "✗"
                else:
                    status = "-"
                lines.append(f"  {status} {doc.path}")

        if self.failed_step:
            lines.append(f"Failed:   {self.failed_step}")

        if self.error:
            lines.extend(["", f"Error: {self.error}"])

        lines.append("=" * 60)
        return "\n".join(lines)


# =============================================================================
# Pipeline Configuration
# =============================================================================

@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration of a pipeline.

    Built once by the entry point (usually with from_env) and passed to
    IdeaPipeline; the pipeline never reads environment state itself.
    """
    llm_base_url: str = ""
    llm_api_key: str = field(default="", repr=False)
    llm_model: str = LLM_MODEL
    llm_title_model: str = LLM_TITLE_MODEL

    git_token: str = field(default="", repr=False)
    git_repo: str = GIT_REPO
    committer_name: str = GIT_COMMITTER_NAME
    committer_email: str = GIT_COMMITTER_EMAIL
    content_dir: str = CONTENT_DIR

    title_timeout: float = TITLE_TIMEOUT
    completion_timeout: float = COMPLETION_TIMEOUT
    augment_timeout: float = AUGMENT_TIMEOUT
    write_timeout: float = WRITE_TIMEOUT

    malformed_retries: int = MALFORMED_RETRIES
    slug_max_attempts: int = SLUG_MAX_ATTEMPTS
    augment_enabled: bool = AUGMENT_ENABLED

    # Write to an in-memory store instead of GitHub
    dry_run: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """Create config from the environment (ideas.config), with overrides."""
        values = dict(
            llm_base_url=LLM_BASE_URL,
            llm_api_key=LLM_API_KEY,
            git_token=GIT_TOKEN,
        )
        values.update(overrides)
        return cls(**values)


# =============================================================================
# Pipeline Class
# =============================================================================

class IdeaPipeline:
    """
    Runs idea submissions through to committed bilingual documents.

    Usage:
        config = PipelineConfig.from_env()
        pipeline = IdeaPipeline(config)
        result = pipeline.post(IdeaSubmission(content="..."))
        print(result.to_summary())

    A pipeline holds only read-only collaborators, so one instance can serve
    concurrent submissions; all per-run state lives in the PostResult.
    """

    def __init__(
        self,
        config: PipelineConfig = None,
        llm: LLMClient = None,
        store: ContentStore = None,
        clock: Callable[[], datetime] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration. Defaults to PipelineConfig.from_env().
            llm: LLM client. Defaults to one built from config.
            store: Content store. Defaults to GitHub when a token is configured
                and dry_run is off, otherwise an in-memory store.
            clock: Source of timestamps for results (default datetime.now).
        """
        self.config = config or PipelineConfig.from_env()
        self.llm = llm or self._build_llm()
        self.store = store or self._build_store()
        self.assembler = MarkdownAssembler(self.config.content_dir)
        self._now = clock or datetime.now

    def _build_llm(self) -> LLMClient:
        return LLMClient(
            base_url=self.config.llm_base_url,
            api_key=self.config.llm_api_key,
            model=self.config.llm_model,
            title_model=self.config.llm_title_model,
            title_timeout=self.config.title_timeout,
            completion_timeout=self.config.completion_timeout,
            augment_timeout=self.config.augment_timeout,
        )

    def _build_store(self) -> ContentStore:
        if self.config.dry_run or not self.config.git_token:
            logger.info("Using in-memory content store")
            return MemoryContentStore()
        return GitHubContentStore(
            token=self.config.git_token,
            repo=self.config.git_repo,
            committer_name=self.config.committer_name,
            committer_email=self.config.committer_email,
            timeout=self.config.write_timeout,
        )

    # =========================================================================
    # Steps
    # =========================================================================

    @staticmethod
    def _checkpoint(should_cancel: Optional[Callable[[], bool]], stage: str) -> None:
        """Stop before an external call when the caller has gone away."""
        if should_cancel is not None and should_cancel():
            raise Cancelled("request cancelled", stage=stage)

    def classify(self, submission: IdeaSubmission) -> Language:
        """Source language of a submission; a given title counts along with the content."""
        text = submission.content
        if submission.title:
            text = f"{submission.title}\n{text}"
        return detect_language(text)

    def polish(
        self,
        title: str,
        content: str,
        lang: Language,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> StructuredResult:
        """
        Polish and translate, repairing the reply into a StructuredResult.

        Raises:
            MalformedResponse: If every attempt produced an unusable reply.
            UpstreamError: If the LLM call fails.
        """
        attempts = 1 + max(self.config.malformed_retries, 0)
        last_error: Optional[MalformedResponse] = None

        for attempt in range(1, attempts + 1):
            self._checkpoint(should_cancel, "polish")
            raw = self.llm.polish_and_translate(title, content, lang, strict=attempt > 1)
            try:
                structured = parse_structured_result(raw)
            except MalformedResponse as e:
                logger.warning(
                    "Malformed polish response (attempt %d/%d): %s\nraw: %r\nrepaired: %r",
                    attempt, attempts, e, e.raw, e.repaired,
                )
                last_error = e
                continue

            if structured.lang != lang:
                logger.warning(
                    "Model labelled polished text %s, classifier said %s; keeping %s",
                    structured.lang.value, lang.value, lang.value,
                )
                structured = replace(structured, lang=lang)
            return structured

        raise last_error

    def derive_slug(
        self,
        structured: StructuredResult,
        submitted_at: datetime,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> str:
        """
        Slug for an idea: the LLM's suggestion, sanitized.

        Falls back to the English title, then to a timestamp, when the
        suggestion has no usable characters.
        """
        self._checkpoint(should_cancel, "slug")
        suggestion = self.llm.generate_slug(structured.polished_title)
        slug = slugify(suggestion)
        if not slug:
            slug = slugify(structured.title_for(Language.EN))
        if not slug:
            slug = f"idea-{submitted_at.strftime('%Y%m%d-%H%M%S')}"
        return slug

    def augment(
        self,
        submission: IdeaSubmission,
        structured: StructuredResult,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> Tuple[Optional[str], Optional[str]]:
        """
        Augmentation blocks for both languages.

        A caller-supplied block is used verbatim as the native block; otherwise
        the LLM writes one (unless augmentation is disabled). The native block
        is then translated for the other document.

        Returns:
            Tuple of (native_block, other_block), both None when there is none.
        """
        lang = structured.lang

        if submission.augmented:
            native = submission.augmented
        elif self.config.augment_enabled:
            self._checkpoint(should_cancel, "augment")
            native = self.llm.augment(structured.polished_title, structured.polished_content, lang)
        else:
            return None, None

        if not native.strip():
            return None, None

        self._checkpoint(should_cancel, "translate")
        other = self.llm.translate(native, lang, lang.other)
        return native, other

    def _write(self, document: MarkdownDocument) -> WriteResult:
        return self.store.create_file(document.path, document.render(), commit_message(document))

    def _commit(
        self,
        result: PostResult,
        structured: StructuredResult,
        base_slug: str,
        date: datetime,
        augmented: Tuple[Optional[str], Optional[str]],
        should_cancel: Optional[Callable[[], bool]],
    ) -> None:
        """Assemble and write both documents, moving past slug collisions."""
        attempts = max(self.config.slug_max_attempts, 1)

        for attempt in range(1, attempts + 1):
            slug = with_suffix(base_slug, attempt)
            native, other = self.assembler.assemble(
                structured, slug, date,
                augmented_native=augmented[0],
                augmented_other=augmented[1],
            )
            result.slug = slug
            result.slug_attempts = attempt
            result.documents = [native, other]
            result.stage = Stage.ASSEMBLED

            # A slug is free only when neither language variant exists
            self._checkpoint(should_cancel, "commit")
            taken = self.store.exists(native.path) or self.store.exists(other.path)
            if not taken:
                self._checkpoint(should_cancel, "commit")
                if self._write(native) is WriteResult.CREATED:
                    result.committed.append(native.lang)
                    break
            logger.info("Slug %r is taken, trying the next candidate", slug)
        else:
            raise UpstreamError(
                f"slug {base_slug!r} still taken after {attempts} attempts",
                stage="commit",
            )

        try:
            self._checkpoint(should_cancel, "commit")
            outcome = self._write(other)
        except IdeasError as e:
            self._mark_partial(result, other, str(e), e)
            return

        if outcome is WriteResult.CONFLICT:
            self._mark_partial(result, other, f"{other.path} already exists")
            return

        result.committed.append(other.lang)
        result.stage = Stage.COMMITTED

    def _mark_partial(
        self,
        result: PostResult,
        missing: MarkdownDocument,
        reason: str,
        exception: Optional[IdeasError] = None,
    ) -> None:
        committed = ", ".join(lang.value for lang in result.committed)
        result.status = PostStatus.PARTIAL
        result.missing = missing.lang
        result.error = f"partial commit: {committed} committed, {missing.lang.value} missing ({reason})"
        result.exception = PartialCommit(result.error, committed=committed, missing=missing.lang.value)
        if exception is not None:
            result.exception.__cause__ = exception
        logger.error("Post %s: %s", result.slug, result.error)

    # =========================================================================
    # Operations
    # =========================================================================

    def post(
        self,
        submission: IdeaSubmission,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> PostResult:
        """
        Execute the full pipeline for one submission.

        Args:
            submission: The idea to publish.
            should_cancel: Optional callable; when it returns True the run stops
                before its next external call. Writes already made are kept.

        Returns:
            PostResult with status done, partial or failed.
        """
        result = PostResult(started_at=self._now())
        logger.info("Posting %s", submission)

        try:
            lang = self.classify(submission)
            result.lang = lang
            result.stage = Stage.CLASSIFIED
            logger.info("Classified as %s", lang.value)

            title = submission.title
            if not title:
                self._checkpoint(should_cancel, "title")
                title = self.llm.generate_title(submission.content)
                logger.info("Generated title: %s", title)

            structured = self.polish(title, submission.content, lang, should_cancel)
            result.title = structured.polished_title
            result.stage = Stage.POLISHED

            base_slug = self.derive_slug(structured, submission.submitted_at, should_cancel)
            result.slug = base_slug
            result.stage = Stage.SLUGGABLE
            logger.info("Slug: %s", base_slug)

            augmented = self.augment(submission, structured, should_cancel)
            result.stage = Stage.AUGMENTED

            self._commit(result, structured, base_slug, submission.submitted_at, augmented, should_cancel)
            if result.status is not PostStatus.PARTIAL:
                result.status = PostStatus.DONE
                result.stage = Stage.DONE
                logger.info("Posted %s: %s", result.slug, ", ".join(result.paths))

        except IdeasError as e:
            self._fail(result, e)
        except Exception as e:
            logger.exception("Unexpected error while posting")
            self._fail(result, IdeasError(f"internal error: {type(e).__name__}: {e}"))

        result.finished_at = self._now()
        return result

    @staticmethod
    def _failed_step(result: PostResult, error: IdeasError) -> str:
        if isinstance(error, UpstreamError) and error.stage:
            return error.stage
        if isinstance(error, MalformedResponse):
            return "polish"
        return _STEP_AFTER[result.stage]

    def _fail(self, result: PostResult, error: IdeasError) -> None:
        result.status = PostStatus.FAILED
        result.failed_step = self._failed_step(result, error)
        result.error = str(error)
        result.exception = error
        logger.error(
            "Post failed in %s (last stage %s): %s",
            result.failed_step, result.stage.value, error,
        )
        if isinstance(error, MalformedResponse):
            logger.error("Last malformed reply\nraw: %r\nrepaired: %r", error.raw, error.repaired)

    def improve(self, submission: IdeaSubmission) -> StructuredResult:
        """
        Classify and polish only; nothing is committed.

        Raises:
            MalformedResponse: If the reply cannot be repaired.
            UpstreamError: If the LLM call fails.
        """
        lang = self.classify(submission)
        return self.polish(submission.title or "", submission.content, lang)

    def retry_missing(self, result: PostResult) -> PostResult:
        """
        Write the missing half of a partial commit.

        The committed half is not touched. Returns a new PostResult: done when
        the missing document is written, partial again otherwise.

        Raises:
            ValueError: If the result is not a partial commit.
        """
        if result.status is not PostStatus.PARTIAL or result.missing is None:
            raise ValueError("retry_missing needs a partial PostResult")

        document = result.document_for(result.missing)
        retried = replace(
            result,
            started_at=self._now(),
            finished_at=None,
            committed=list(result.committed),
        )

        try:
            outcome = self._write(document)
        except IdeasError as e:
            self._mark_partial(retried, document, str(e), e)
        else:
            if outcome is WriteResult.CONFLICT:
                self._mark_partial(retried, document, f"{document.path} already exists")
            else:
                retried.committed.append(document.lang)
                retried.missing = None
                retried.status = PostStatus.DONE
                retried.stage = Stage.DONE
                retried.error = None
                retried.exception = None
                logger.info("Completed %s: wrote %s", retried.slug, document.path)

        retried.finished_at = self._now()
        return retried


# =============================================================================
# Convenience Functions
# =============================================================================

def run_post(
    payload: Dict,
    config: PipelineConfig = None,
    llm: LLMClient = None,
    store: ContentStore = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> PostResult:
    """
    Post an idea from a request payload ({title?, content, augmented?}).

    Convenience function for programmatic use. An invalid payload yields a
    failed PostResult without any external call.
    """
    try:
        submission = IdeaSubmission.from_dict(payload)
    except ValidationError as e:
        now = datetime.now()
        logger.warning("Rejected submission: %s", e)
        return PostResult(
            started_at=now,
            finished_at=now,
            failed_step="validate",
            error=str(e),
            exception=e,
        )
    pipeline = IdeaPipeline(config, llm=llm, store=store)
    return pipeline.post(submission, should_cancel=should_cancel)
