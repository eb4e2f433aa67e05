"""Shared fixtures: small Next.js-style project trees for scanning."""

import pytest


def write_files(root, files: dict[str, str]):
    """Helper: write {relative_path: content} under root, creating directories."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


SAMPLE_PROJECT = {
    "app/dashboard/page.tsx": (
        '"use client";\n'
        "\n"
        "export default function Page() {\n"
        "  const key = process.env.STRIPE_SECRET_KEY;\n"
        "  const base = process.env.NEXT_PUBLIC_SITE_URL;\n"
        "  return null;\n"
        "}\n"
    ),
    "src/app/api/users/route.ts": (
        "export async function GET() {\n"
        '  const base = process.env["NEXT_PUBLIC_API_BASE"];\n'
        "  const db = process.env.DATABASE_URL;\n"
        "  return Response.json({ base, db });\n"
        "}\n"
    ),
    "lib/auth.js": (
        "module.exports = {\n"
        "  secret: process.env.AUTH_SECRET,\n"
        "};\n"
    ),
    "node_modules/pkg/index.js": "process.env.IGNORED_DEP_VAR\n",
    ".next/server/chunk.js": "process.env.IGNORED_BUILD_VAR\n",
    "README.md": "process.env.NOT_SOURCE\n",
}


@pytest.fixture
def project(tmp_path):
    """A small Next.js project with client, server-route and library files."""
    return write_files(tmp_path / "project", SAMPLE_PROJECT)
