"""
File helpers shared by the session store and the scrape database
"""
import os
import tempfile
from pathlib import Path


def write_text_atomic(path: Path, content: str):
    """Replace a file in one step so readers never see a partial write"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
