"""Risk rule catalog.

The catalog is an ordered, immutable table. Order matters: a file that
matches several rules reports them in catalog order. Suffix patterns anchor
with ``\\Z`` so a trailing newline in a name does not count as the end.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cloudscan.domain import Severity


@dataclass(frozen=True)
class RiskRule:
    """A named category of risky file names."""

    patterns: tuple[re.Pattern[str], ...]
    category: str
    severity: Severity
    description: str

    def matches(self, name: str) -> bool:
        """Return True if any pattern is found in ``name``."""
        return any(pattern.search(name) for pattern in self.patterns)


def _rule(
    patterns: list[str], category: str, severity: Severity, description: str
) -> RiskRule:
    """Compile ``patterns`` case-insensitively into a RiskRule."""
    return RiskRule(
        patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
        category=category,
        severity=severity,
        description=description,
    )


DEFAULT_RULES: tuple[RiskRule, ...] = (
    # Critical security files
    _rule(
        [r"\.env\Z", r"\.environment\Z", r"\.env\.local\Z", r"\.env\.prod\Z",
         r"\.env\.production\Z"],
        "Environment Configuration File",
        Severity.HIGH,
        "May contain API keys, database passwords, and other secrets",
    ),
    _rule(
        [r"\.key\Z", r"\.pem\Z", r"\.crt\Z", r"\.cer\Z", r"\.der\Z"],
        "Cryptographic Key/Certificate",
        Severity.HIGH,
        "Private keys or certificates that could grant unauthorized access",
    ),
    _rule(
        [r"\.p12\Z", r"\.pfx\Z", r"\.jks\Z", r"\.keystore\Z", r"\.truststore\Z"],
        "Certificate Store",
        Severity.HIGH,
        "Encrypted certificate stores that may contain private keys",
    ),
    _rule(
        [r"id_rsa\Z", r"id_dsa\Z", r"id_ecdsa\Z", r"id_ed25519\Z", r"known_hosts\Z",
         r"authorized_keys\Z"],
        "SSH Keys/Config",
        Severity.HIGH,
        "SSH private keys or configuration files for server access",
    ),
    # Cloud credentials
    _rule(
        [r"\.aws\Z", r"credentials\Z", r"aws_credentials\Z", r"\.s3cfg\Z"],
        "AWS/Cloud Credentials",
        Severity.HIGH,
        "Cloud service credentials for AWS, S3, or other providers",
    ),
    _rule(
        [r"gcloud\Z", r"\.gcp\Z", r"service[_-]account\.json\Z",
         r"firebase[_-]adminsdk"],
        "Google Cloud Credentials",
        Severity.HIGH,
        "Google Cloud Platform or Firebase service account keys",
    ),
    _rule(
        [r"\.azure\Z", r"azure[_-]credentials\Z", r"\.azureProfile\Z"],
        "Azure Credentials",
        Severity.HIGH,
        "Microsoft Azure authentication credentials",
    ),
    # Passwords and authentication
    _rule(
        [r"password", r"passwd", r"pwd", r"login", r"auth"],
        "Password/Authentication File",
        Severity.HIGH,
        "Filename suggests it contains passwords or authentication data",
    ),
    _rule(
        [r"secret", r"credential", r"token", r"api[_-]key"],
        "Secrets/API Keys",
        Severity.HIGH,
        "Filename suggests it contains authentication secrets or API keys",
    ),
    _rule(
        [r"\.htpasswd\Z", r"\.netrc\Z", r"\.pgpass\Z"],
        "System Password Files",
        Severity.HIGH,
        "System files containing authentication credentials",
    ),
    # Databases
    _rule(
        [r"\.sql\Z", r"\.dump\Z", r"\.db\Z", r"\.sqlite\Z", r"\.sqlite3\Z"],
        "Database File",
        Severity.MEDIUM,
        "Database files may contain sensitive user data",
    ),
    _rule(
        [r"\.mdb\Z", r"\.accdb\Z", r"\.dbf\Z", r"\.fdb\Z"],
        "Desktop Database",
        Severity.MEDIUM,
        "Desktop database files may contain sensitive information",
    ),
    # Backups and archives
    _rule(
        [r"\.bak\Z", r"backup", r"\.old\Z", r"\.orig\Z", r"\.save\Z"],
        "Backup File",
        Severity.MEDIUM,
        "Backup files may contain outdated but sensitive information",
    ),
    _rule(
        [r"\.tar\Z", r"\.zip\Z", r"\.7z\Z", r"\.rar\Z", r"\.gz\Z", r"\.tgz\Z"],
        "Archive File",
        Severity.LOW,
        "Compressed archives may contain sensitive files",
    ),
    # Configuration
    _rule(
        [r"config\Z", r"\.config\Z", r"\.conf\Z", r"\.ini\Z", r"\.cfg\Z"],
        "Configuration File",
        Severity.MEDIUM,
        "Configuration files may contain sensitive settings",
    ),
    _rule(
        [r"\.properties\Z", r"\.settings\Z", r"\.plist\Z"],
        "Application Settings",
        Severity.MEDIUM,
        "Application settings files may contain API keys or passwords",
    ),
    # Development
    _rule(
        [r"\.git\Z", r"\.svn\Z", r"\.hg\Z"],
        "Version Control Directory",
        Severity.MEDIUM,
        "Version control directories may expose source code history",
    ),
    _rule(
        [r"dockerfile\Z", r"docker-compose", r"\.dockerignore\Z"],
        "Docker Configuration",
        Severity.LOW,
        "Docker files may contain build secrets or configuration",
    ),
    # Financial and personal data
    _rule(
        [r"tax", r"salary", r"payroll", r"invoice", r"receipt"],
        "Financial Document",
        Severity.MEDIUM,
        "Financial documents contain sensitive personal/business data",
    ),
    _rule(
        [r"social[_-]security", r"ssn", r"passport", r"license"],
        "Identity Document",
        Severity.HIGH,
        "Identity documents contain personally identifiable information",
    ),
    _rule(
        [r"medical", r"health", r"patient", r"diagnosis"],
        "Medical Record",
        Severity.HIGH,
        "Medical records contain protected health information",
    ),
    # Communication
    _rule(
        [r"\.pst\Z", r"\.ost\Z", r"\.mbox\Z", r"\.eml\Z"],
        "Email Archive",
        Severity.MEDIUM,
        "Email archives may contain sensitive communications",
    ),
    _rule(
        [r"\.msg\Z", r"mailbox", r"messages"],
        "Email/Message File",
        Severity.MEDIUM,
        "Email or message files may contain private communications",
    ),
    # Application specific
    _rule(
        [r"\.npmrc\Z", r"\.pypirc\Z", r"\.gemrc\Z", r"composer\.json\Z"],
        "Package Manager Config",
        Severity.MEDIUM,
        "Package manager configs may contain registry credentials",
    ),
    _rule(
        [r"\.kdbx\Z", r"\.kdb\Z", r"keychain\Z", r"vault"],
        "Password Manager File",
        Severity.HIGH,
        "Password manager databases contain encrypted credentials",
    ),
    _rule(
        [r"\.rdp\Z", r"\.vnc\Z", r"\.teamviewer\Z"],
        "Remote Access Config",
        Severity.MEDIUM,
        "Remote access configuration files may contain connection details",
    ),
    # Logs
    _rule(
        [r"\.log\Z", r"error", r"debug", r"trace"],
        "Log File",
        Severity.LOW,
        "Log files may accidentally contain sensitive information",
    ),
    # Miscellaneous
    _rule(
        [r"private", r"confidential", r"internal", r"restricted"],
        "Classified File",
        Severity.MEDIUM,
        "File marked as private/confidential may contain sensitive information",
    ),
    _rule(
        [r"\.json\Z", r"\.xml\Z", r"\.yml\Z", r"\.yaml\Z", r"\.toml\Z"],
        "Structured Config File",
        Severity.LOW,
        "Structured configuration files may contain sensitive data",
    ),
    _rule(
        [r"core\Z", r"crash", r"minidump", r"\.dmp\Z"],
        "System Crash/Core Dump",
        Severity.MEDIUM,
        "System dumps may contain memory with sensitive data",
    ),
    _rule(
        [r"history\Z", r"\.bash_history\Z", r"\.zsh_history\Z", r"\.history\Z"],
        "Command History",
        Severity.MEDIUM,
        "Command history may contain passwords typed in commands",
    ),
)
