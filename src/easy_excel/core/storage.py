"""
임시 artifact 저장소 + 비동기 삭제 큐.

규칙:
- 저장 파일명: {file_name}_{uuid4}.xlsx (저장소 루트 바로 아래)
- 원자적 쓰기: temp → rename + fsync (중간 상태 파일 없음)
- 다운로드 후 삭제는 DeletionQueue에서 (요청 처리 스레드를 막지 않음)
- DeletionQueue는 만든 쪽이 shutdown() 책임

삭제 큐 정책:
- 워커 수 = CPU 코어 수, 대기 용량 = 코어 수 × 4
- 용량 초과 시 호출한 스레드에서 바로 삭제 (caller-runs)
"""

import logging
import os
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from types import TracebackType

from easy_excel.core.ids import generate_artifact_name, is_artifact_name, is_safe_name
from easy_excel.domain.constants import TEMP_EXCEL_DIR, XLSX
from easy_excel.domain.errors import ArtifactIOError, ArtifactNotFoundError
from easy_excel.render.excel import SheetDocument

logger = logging.getLogger(__name__)


def delete_file(path: Path) -> bool:
    """
    파일 삭제 (없으면 무시).

    Returns:
        실제로 삭제했으면 True
    """
    try:
        if not path.exists():
            return False
        path.unlink()
    except OSError as e:
        logger.warning(f"Failed to delete {path}: {e}")
        return False

    logger.debug(f"file {path} deleted!")
    return True


# =============================================================================
# Deletion Queue
# =============================================================================


class DeletionQueue:
    """
    파일 삭제 작업 큐.

    Usage:
        with DeletionQueue() as queue:
            queue.submit(path)
    """

    def __init__(self, max_workers: int | None = None, queue_size: int | None = None):
        cores = os.cpu_count() or 1
        self.max_workers = max_workers or cores
        self.queue_size = queue_size if queue_size is not None else cores * 4

        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="easy-excel-delete",
        )
        # 실행 중 + 대기 작업 수 제한
        self._slots = threading.BoundedSemaphore(self.max_workers + self.queue_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, path: Path) -> Future[bool] | None:
        """
        삭제 예약.

        Returns:
            예약된 Future. 용량 초과/종료 후라 바로 삭제했으면 None
        """
        if self._closed or not self._slots.acquire(blocking=False):
            logger.debug(f"Deletion queue full or closed, deleting in caller: {path}")
            delete_file(path)
            return None

        try:
            future = self._executor.submit(delete_file, path)
        except RuntimeError:
            # shutdown 과 경합
            self._slots.release()
            delete_file(path)
            return None

        future.add_done_callback(lambda _: self._slots.release())
        return future

    def shutdown(self, wait: bool = True) -> None:
        """큐 종료. wait=True면 예약된 삭제가 끝날 때까지 대기."""
        self._closed = True
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "DeletionQueue":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True)


# =============================================================================
# Artifact Store
# =============================================================================


class ArtifactStore:
    """
    생성된 엑셀 파일 임시 저장소.

    구조:
    <root>/
    ├── users_<uuid>.xlsx
    └── orders_<uuid>.xlsx
    """

    def __init__(
        self,
        root: Path = Path(TEMP_EXCEL_DIR),
        deletion_queue: DeletionQueue | None = None,
        extension: str = XLSX,
    ):
        """
        Args:
            root: 저장소 루트 경로
            deletion_queue: 다운로드 후 삭제에 쓸 큐 (None이면 바로 삭제)
            extension: 저장 파일 확장자
        """
        self.root = root
        self.deletion_queue = deletion_queue
        self.extension = extension

    def path_for(self, name: str) -> Path:
        """
        artifact 이름 → 파일 경로.

        Raises:
            ArtifactNotFoundError: 루트 밖을 가리키거나 artifact 형식이 아닌 이름
        """
        if not is_safe_name(name) or not is_artifact_name(name, extension=self.extension):
            raise ArtifactNotFoundError(name=name, error="invalid artifact name")
        return self.root / name

    def save(self, document: SheetDocument, file_name: str) -> str:
        """
        문서를 고유한 이름으로 저장.

        Args:
            document: 저장할 문서
            file_name: 레이아웃의 fileName

        Returns:
            생성된 artifact 이름

        Raises:
            ArtifactIOError: 폴더 생성/쓰기 실패
        """
        name = generate_artifact_name(file_name, self.extension)
        if not is_safe_name(name):
            raise ArtifactIOError(name=name, error="fileName must not contain path separators")

        path = self.root / name
        temp_path = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.root,
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                document.write(f)
                f.flush()
                try:
                    os.fsync(f.fileno())
                except OSError as e:
                    logger.warning(f"File fsync failed for {path}: {e}")

            os.rename(temp_path, path)  # 원자적

        except OSError as e:
            self._discard(temp_path)
            logger.error(f"Failed to write artifact {path}: {e}")
            raise ArtifactIOError(path=str(path), error=str(e)) from e
        except Exception:
            self._discard(temp_path)
            raise

        logger.info(f"Saved artifact {name}")
        return name

    @staticmethod
    def _discard(temp_path: Path | None) -> None:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)

    def read(self, name: str) -> bytes:
        """
        artifact 내용 읽기.

        Raises:
            ArtifactNotFoundError: 없는 artifact
            ArtifactIOError: 읽기 실패
        """
        path = self.path_for(name)
        if not path.is_file():
            raise ArtifactNotFoundError(name=name)
        try:
            return path.read_bytes()
        except OSError as e:
            raise ArtifactIOError(path=str(path), error=str(e)) from e

    def retrieve(self, name: str) -> bytes:
        """
        한 번만 내려받기: 읽은 뒤 (성공/실패 모두) 삭제 예약.
        """
        path = self.path_for(name)
        try:
            return self.read(name)
        finally:
            self.schedule_delete(path)

    def schedule_delete(self, path: Path) -> None:
        if self.deletion_queue is None:
            delete_file(path)
        else:
            self.deletion_queue.submit(path)
