"""Starter files rendered for a project, by project type."""

import json
import re
from collections.abc import Callable
from dataclasses import dataclass

from src.autobuilder.models import Project
from src.autobuilder.models.enums import ProjectType


@dataclass(frozen=True)
class ScaffoldFile:
    path: str
    content: str
    language: str | None

    @property
    def filename(self) -> str:
        return self.path.rsplit("/", 1)[-1]


def slugify(name: str) -> str:
    """Package-style name: lower case, runs of whitespace replaced with '-'."""
    return re.sub(r"\s+", "-", name.strip().lower())


def contract_name(name: str) -> str:
    """Rust trait name: alphanumerics of the project name, first letter kept."""
    cleaned = re.sub(r"[^0-9A-Za-z]", "", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = f"Project{cleaned}"
    return f"{cleaned}Contract"


def _readme(project: Project, getting_started: bool) -> str:
    body = f"# {project.name}\n\n{project.description or ''}"
    if getting_started:
        body += "\n\n## Getting Started\n\n```bash\nnpm install\nnpm run dev\n```"
    return body + "\n"


def _web3_app(project: Project) -> list[ScaffoldFile]:
    package = {
        "name": slugify(project.name),
        "version": "1.0.0",
        "description": project.description or "",
        "scripts": {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
        },
        "dependencies": {
            "next": "^15.0.0",
            "react": "^18.2.0",
            "@multiversx/sdk-core": "^13.0.0",
        },
    }
    page = (
        "export default function HomePage() {\n"
        "  return (\n"
        "    <div>\n"
        f"      <h1>{project.name}</h1>\n"
        f"      <p>{project.description or ''}</p>\n"
        "    </div>\n"
        "  )\n"
        "}\n"
    )
    return [
        ScaffoldFile("package.json", json.dumps(package, indent=2) + "\n", "json"),
        ScaffoldFile("README.md", _readme(project, getting_started=True), "markdown"),
        ScaffoldFile("src/app/page.tsx", page, "typescript"),
    ]


def _smart_contract(project: Project) -> list[ScaffoldFile]:
    cargo = f'[package]\nname = "{slugify(project.name)}"\nversion = "0.1.0"\nedition = "2021"\n'
    lib = (
        "#![no_std]\n\n"
        "use multiversx_sc::imports::*;\n\n"
        "#[multiversx_sc::contract]\n"
        f"pub trait {contract_name(project.name)} {{\n"
        "    #[init]\n"
        "    fn init(&self) {}\n"
        "}\n"
    )
    return [
        ScaffoldFile("Cargo.toml", cargo, "toml"),
        ScaffoldFile("src/lib.rs", lib, "rust"),
    ]


def _default(project: Project) -> list[ScaffoldFile]:
    return [ScaffoldFile("README.md", _readme(project, getting_started=False), "markdown")]


SCAFFOLDS: dict[str, Callable[[Project], list[ScaffoldFile]]] = {
    ProjectType.WEB3_APP.value: _web3_app,
    ProjectType.SMART_CONTRACT.value: _smart_contract,
}


def render_scaffold(project: Project) -> list[ScaffoldFile]:
    """Files for the project's type. Types without a scaffold get a README only."""
    return SCAFFOLDS.get(project.type, _default)(project)
