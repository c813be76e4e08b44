"""Shared test fixtures."""

from __future__ import annotations

import base64
import zipfile
from pathlib import Path

import httpx
import pytest

from gitpatrol.config import GitPatrolConfig

OBFUSCATED_JS = (
    "const greet = () => console.log('hi');\n"
    "var _0x1a2b = eval(String.fromCharCode(104, 105));\n"
)

CLEAN_JS = (
    "export function add(a, b) {\n"
    "  return a + b;\n"
    "}\n"
    "// payloads arrive as base64 from the server\n"
)

SAMPLE_TREE = {
    "package.json": '{"name": "sample"}\n',
    "README.md": "eval( fromCharCode _0x in docs are ignored\n",
    "src/index.js": CLEAN_JS,
    "src/lib/packed.js": OBFUSCATED_JS,
    "src/types.ts": "export type Id = string;\n",
}

CLEAN_TREE = {
    "package.json": '{"name": "clean"}\n',
    "src/index.js": CLEAN_JS,
    "src/view.tsx": "export const View = () => <div />;\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def write_zip(path: Path, files: dict[str, str], with_dirs: bool = False) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        if with_dirs:
            dirs = {rel.rsplit("/", 1)[0] + "/" for rel in files if "/" in rel}
            for d in sorted(dirs):
                zf.writestr(d, "")
        for rel, content in files.items():
            zf.writestr(rel, content)
    return path


class FakeGitHub:
    """Serves a file tree through an httpx.MockTransport shaped like the
    GitHub contents API."""

    def __init__(self, files: dict[str, str], owner: str = "acme", repo: str = "widgets"):
        self.files = files
        self.prefix = f"/repos/{owner}/{repo}/contents"
        # path -> (status, body) served instead of the tree
        self.overrides: dict[str, tuple[int, str]] = {}
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url_path = request.url.path
        if not url_path.startswith(self.prefix):
            return httpx.Response(404, text='{"message": "Not Found"}')
        path = url_path[len(self.prefix):].strip("/")

        if path in self.overrides:
            status, body = self.overrides[path]
            return httpx.Response(status, text=body)

        if path in self.files:
            encoded = base64.encodebytes(self.files[path].encode("utf-8")).decode()
            return httpx.Response(
                200,
                json={
                    "type": "file",
                    "path": path,
                    "name": path.rsplit("/", 1)[-1],
                    "encoding": "base64",
                    "content": encoded,
                },
            )

        entries = self._list(path)
        if entries is None:
            return httpx.Response(404, text='{"message": "Not Found"}')
        return httpx.Response(200, json=entries)

    def _list(self, directory: str) -> list[dict] | None:
        prefix = f"{directory}/" if directory else ""
        children: dict[str, str] = {}
        for rel in self.files:
            if not rel.startswith(prefix):
                continue
            head, sep, _ = rel[len(prefix):].partition("/")
            children[prefix + head] = "dir" if sep else "file"
        if not children and directory:
            return None
        return [
            {
                "type": kind,
                "path": path,
                "name": path.rsplit("/", 1)[-1],
                "download_url": None,
            }
            for path, kind in sorted(children.items())
        ]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "GITHUB_TOKEN",
        "GITPATROL_API_URL",
        "GITPATROL_TIMEOUT",
        "GITPATROL_QUEUE_SIZE",
        "GITPATROL_STRICT_LISTING",
        "GITPATROL_WEB_PORT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> GitPatrolConfig:
    return GitPatrolConfig(queue_size=2)


@pytest.fixture
def sample_folder(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "sample", SAMPLE_TREE)


@pytest.fixture
def sample_zip(tmp_path: Path) -> Path:
    return write_zip(tmp_path / "sample.zip", SAMPLE_TREE, with_dirs=True)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub(SAMPLE_TREE)


@pytest.fixture
def make_github():
    return FakeGitHub


@pytest.fixture
def obfuscated_js() -> str:
    return OBFUSCATED_JS


@pytest.fixture
def clean_js() -> str:
    return CLEAN_JS


@pytest.fixture
def clean_tree() -> dict[str, str]:
    return dict(CLEAN_TREE)


@pytest.fixture
def sample_tree() -> dict[str, str]:
    return dict(SAMPLE_TREE)


@pytest.fixture
def make_folder(tmp_path: Path):
    def _make(files: dict[str, str], name: str = "tree") -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture
def make_zip(tmp_path: Path):
    def _make(
        files: dict[str, str], name: str = "tree.zip", with_dirs: bool = False
    ) -> Path:
        return write_zip(tmp_path / name, files, with_dirs=with_dirs)

    return _make


@pytest.fixture
def corrupt_zip(tmp_path: Path) -> Path:
    """A stored zip whose single entry fails its CRC check on read."""
    path = tmp_path / "corrupt.zip"
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as zf:
        zf.writestr("src/packed.js", OBFUSCATED_JS)
    raw = path.read_bytes()
    payload = OBFUSCATED_JS.encode("utf-8")
    assert raw.count(payload) == 1
    path.write_bytes(raw.replace(payload, payload.replace(b"eval", b"EVAL")))
    return path
