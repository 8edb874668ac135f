import json
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import ValidationError
from tqdm import tqdm

from ..models import CourseDigest, SyllabusNode, SyllabusRecord

logger = logging.getLogger(__name__)

CODE_PATH: tuple[tuple[str, ...], str] = (
    ("講義概要/Course Information", "科目基礎情報/General Information"),
    "科目番号/Code",
)


def pick(
    tree: Sequence[SyllabusNode], title_path: Sequence[str], content_key: str
) -> Optional[str]:
    nodes = list(tree)
    node: Optional[SyllabusNode] = None
    for title in title_path:
        node = next((n for n in nodes if n.title == title), None)
        if node is None:
            return None
        nodes = node.children
    if node is None:
        return None
    return node.contents.get(content_key)


def render_markdown(tree: Sequence[SyllabusNode], depth: int = 1) -> str:
    blocks: list[str] = []
    for node in tree:
        blocks.append(f"{'#' * min(depth, 6)} {node.title}")
        for key, text in node.contents.items():
            text = text.strip()
            blocks.append(f"**{key}**\n\n{text}" if text else f"**{key}**")
        child = render_markdown(node.children, depth + 1)
        if child:
            blocks.append(child)
    return "\n\n".join(blocks)


def record_to_digest(record: SyllabusRecord) -> CourseDigest:
    title_path, content_key = CODE_PATH
    code = pick(record.contentTree, title_path, content_key)
    return CourseDigest.model_validate(
        {
            **record.digest,
            "courseCode": (code or "").strip(),
            "description": render_markdown(record.contentTree),
        }
    )


def read_dumped_syllabus(
    dump_dir: Union[str, Path], year: int, progress: bool = True
) -> list[SyllabusRecord]:
    year_dir = Path(dump_dir) / str(year)
    if not year_dir.is_dir():
        raise FileNotFoundError(f"no syllabus dump for {year} at {year_dir}")

    files = sorted(year_dir.glob("*.json"))
    logger.info(f"reading {len(files)} syllabus files from {year_dir}")

    records = []
    for path in tqdm(
        files,
        desc=f"Parsing syllabus {year}",
        leave=True,
        disable=not progress,
    ):
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            record = SyllabusRecord.model_validate(payload)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"malformed syllabus file {path}: {e}") from e
        records.append(record.model_copy(update={"source": path.name}))
    return records
