"""
Text file allow-list.

Decides which repository files are worth indexing: source, config,
documentation and data formats by extension, plus a few well-known
extensionless names. README files are never indexed.

Dependencies: None
System role: Content source file filter
"""

from pathlib import PurePosixPath

TEXT_EXTENSIONS: tuple[str, ...] = (
    ".md", ".txt", ".json", ".xml", ".yml", ".yaml", ".properties", ".conf", ".config",
    ".java", ".js", ".ts", ".jsx", ".tsx", ".py", ".rb", ".go", ".rs", ".c", ".cpp", ".h", ".hpp",
    ".css", ".scss", ".sass", ".less", ".html", ".htm", ".php", ".sql", ".sh", ".bash", ".zsh",
    ".ps1", ".bat", ".cmd", ".dockerfile", ".makefile", ".cmake", ".gradle", ".maven", ".pom",
    ".log", ".ini", ".toml", ".cfg", ".env", ".gitignore", ".gitattributes", ".editorconfig",
    ".eslintrc", ".prettierrc", ".babelrc", ".webpack", ".rollup", ".vite",
    # Certificates and keys
    ".crt", ".cert", ".pem", ".key", ".pub", ".cer", ".der", ".p7b", ".p7c", ".p12", ".pfx",
    # Templates and response files
    ".rsp", ".response", ".template", ".tpl", ".mustache", ".hbs", ".jinja", ".j2",
    # Documentation
    ".rst", ".adoc", ".asciidoc", ".tex", ".latex", ".org", ".wiki",
    # Data
    ".csv", ".tsv", ".jsonl", ".ndjson", ".geojson", ".topojson",
    # Infrastructure
    ".tf", ".terraform", ".hcl", ".nomad", ".consul", ".vault", ".k8s", ".kube",
    ".helm", ".chart", ".ansible", ".playbook", ".role", ".handler",
    # CI/CD
    ".jenkins", ".travis", ".circleci", ".github", ".gitlab", ".azure", ".bitbucket",
)

TEXT_FILE_NAMES = frozenset({"dockerfile", "makefile", "license", "changelog", "contributing"})

EXCLUDED_FILE_NAMES = frozenset({"readme.md", "readme"})


def is_text_file(path: str | None) -> bool:
    """
    Check whether a repository path should be indexed.

    Only the final path component is inspected, case-insensitively.

    Args:
        path: File path within the repository

    Returns:
        bool: True for allow-listed text files
    """
    if not path:
        return False
    file_name = PurePosixPath(path).name.lower()
    if not file_name or file_name in EXCLUDED_FILE_NAMES:
        return False
    return file_name.endswith(TEXT_EXTENSIONS) or file_name in TEXT_FILE_NAMES
