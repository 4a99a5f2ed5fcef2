"""Async functional archive operations."""

import asyncio
from functools import partial
from pathlib import Path

import aiofiles.os

from .core.types import ArchiveConfig, UpdateResult
from .exceptions import PreconditionError
from .operations.create import create_targz
from .operations.extract import extract_targz
from .operations.update import update_targz


async def _require_file(path: Path | str, kind: str) -> None:
    """Fail early when an input file is missing."""
    if not await aiofiles.os.path.isfile(path):
        raise PreconditionError(f"{kind} does not exist: {path}")


async def create_archive(
    archive_path: str, source_dir: str, config: ArchiveConfig | None = None
) -> list[str]:
    """디렉토리 트리로 tar.gz 아카이브를 생성합니다.

    Args:
        archive_path: 생성할 아카이브 경로 (예: "backup.tar.gz")
        source_dir: 아카이브할 디렉토리 (엔트리 이름은 이 경로 기준 상대경로)
        config: 버퍼 크기, 압축 레벨 설정 (선택사항)

    Returns:
        list[str]: 기록된 파일 엔트리 이름 목록 (예: ["a.txt", "sub/b.txt"])

    Raises:
        PreconditionError: source_dir 가 디렉토리가 아닌 경우

    Examples:
        # 현재 디렉토리의 docs 폴더를 아카이브
        names = await create_archive("docs.tar.gz", "./docs")
        print(f"{len(names)}개 파일 추가")
    """
    if not await aiofiles.os.path.isdir(source_dir):
        raise PreconditionError(f"Source directory does not exist: {source_dir}")

    return await asyncio.get_event_loop().run_in_executor(
        None, partial(create_targz, archive_path, source_dir, config=config)
    )


async def extract_archive(
    archive_path: str, dest_dir: str, config: ArchiveConfig | None = None
) -> list[Path]:
    """tar.gz 아카이브를 디렉토리에 풀어냅니다.

    Args:
        archive_path: 읽을 아카이브 경로 (예: "backup.tar.gz")
        dest_dir: 압축을 풀 디렉토리 (없으면 생성)
        config: 버퍼 크기 설정 (선택사항)

    Returns:
        list[Path]: 생성된 파일/디렉토리 경로 목록 (아카이브 순서)

    Raises:
        PreconditionError: 아카이브 파일이 존재하지 않는 경우
        CorruptArchiveError: gzip 스트림 또는 tar 헤더가 손상된 경우

    Examples:
        paths = await extract_archive("backup.tar.gz", "./restore")
    """
    await _require_file(archive_path, "Archive")

    return await asyncio.get_event_loop().run_in_executor(
        None, partial(extract_targz, archive_path, dest_dir, config=config)
    )


async def update_archive(
    archive_path: str,
    replacement_path: str,
    translate: bool = True,
    config: ArchiveConfig | None = None,
) -> UpdateResult:
    """tar.gz 아카이브 안에서 파일 이름이 같은 엔트리를 교체합니다.

    replacement_path 의 파일 이름(basename)과 같은 이름을 가진 모든 엔트리의
    내용을 교체합니다. 엔트리의 디렉토리 경로는 그대로 유지됩니다.

    Args:
        archive_path: 수정할 아카이브 경로 (예: "release.tar.gz")
        replacement_path: 새 내용을 담은 파일 (예: "./notes.txt")
        translate: 나머지 텍스트 엔트리의 LF 줄바꿈을 CRLF 로 변환 (기본값: True)
        config: 버퍼 크기, 임시 파일 이름, 매칭 실패 정책 (선택사항)

    Returns:
        UpdateResult: 교체된 엔트리 수와 파이프라인 최종 상태

    Raises:
        PreconditionError: 입력 파일이 없거나 임시 파일 이름이 이미 사용 중인 경우
        NoMatchingEntryError: 일치하는 엔트리가 없는 경우 (allow_no_match=False)
        CorruptArchiveError: 아카이브가 손상된 경우

    Note:
        같은 아카이브에 대한 업데이트는 동시에 실행하면 안 됩니다.
        임시 파일 이름(tmp.tar)이 고정되어 있습니다.

    Examples:
        # dir/notes.txt 와 other/notes.txt 모두 교체
        result = await update_archive("release.tar.gz", "notes.txt")
        print(f"교체된 엔트리: {result.replaced}")
    """
    await _require_file(archive_path, "Archive")
    await _require_file(replacement_path, "Replacement file")

    return await asyncio.get_event_loop().run_in_executor(
        None,
        partial(
            update_targz,
            archive_path,
            replacement_path,
            translate=translate,
            config=config,
        ),
    )
