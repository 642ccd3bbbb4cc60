"""Default package-manager and programming-tool tables.

Keyed by the command token that starts the invocation. Table order is
detection order. Install patterns carry one or two capture groups; the
first non-empty group is the package name. Leading flags (`-g`, `-y`,
`--user`) are skipped so they are never reported as the package.
"""

PACKAGE_MANAGERS: dict[str, dict[str, str]] = {
    "pip": {
        "name": "pip",
        "description": "Python package installer, the standard package manager for Python",
        "search_url_template": "https://pypi.org/project/{package}/",
        "install_pattern": r"pip\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "uv": {
        "name": "uv",
        "description": "Ultra-fast Python package installer and resolver",
        "search_url_template": "https://pypi.org/project/{package}/",
        "install_pattern": (
            r"uv\s+add\s+(?:-\S+\s+)*([^\s-]\S*)"
            r"|uv\s+pip\s+install\s+(?:-\S+\s+)*([^\s-]\S*)"
        ),
    },
    "npm": {
        "name": "npm",
        "description": "Node Package Manager, the default package manager for Node.js",
        "search_url_template": "https://www.npmjs.com/package/{package}",
        "install_pattern": (
            r"npm\s+install\s+(?:-\S+\s+)*([^\s-]\S*)"
            r"|npm\s+i\s+(?:-\S+\s+)*([^\s-]\S*)"
        ),
    },
    "yarn": {
        "name": "yarn",
        "description": "Fast, reliable, and secure dependency management for JavaScript",
        "search_url_template": "https://www.npmjs.com/package/{package}",
        "install_pattern": r"yarn\s+add\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "pnpm": {
        "name": "pnpm",
        "description": "Fast, disk space efficient package manager for Node.js",
        "search_url_template": "https://www.npmjs.com/package/{package}",
        "install_pattern": (
            r"pnpm\s+add\s+(?:-\S+\s+)*([^\s-]\S*)"
            r"|pnpm\s+install\s+(?:-\S+\s+)*([^\s-]\S*)"
        ),
    },
    "choco": {
        "name": "Chocolatey",
        "description": "Package manager for Windows, automates software installation",
        "search_url_template": "https://chocolatey.org/packages/{package}",
        "install_pattern": r"choco\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "winget": {
        "name": "winget",
        "description": "Windows Package Manager, native package manager for Windows 10/11",
        "search_url_template": "https://winget.run/pkg/{package}",
        "install_pattern": r"winget\s+install\s+(?:--id\s+)?([^\s-]+(?:\.[^\s-]+)*)",
    },
    "scoop": {
        "name": "Scoop",
        "description": "Command-line installer for Windows, focuses on open-source software",
        "search_url_template": "https://scoop.sh/#/apps?q={package}",
        "install_pattern": r"scoop\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "conda": {
        "name": "Conda",
        "description": "Package manager for Python and other languages, part of Anaconda",
        "search_url_template": "https://anaconda.org/search?q={package}",
        "install_pattern": r"conda\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "mamba": {
        "name": "Mamba",
        "description": "Fast, robust, and cross-platform package manager (conda alternative)",
        "search_url_template": "https://anaconda.org/search?q={package}",
        "install_pattern": r"mamba\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "cargo": {
        "name": "Cargo",
        "description": "Rust package manager and build tool",
        "search_url_template": "https://crates.io/crates/{package}",
        "install_pattern": r"cargo\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "gem": {
        "name": "RubyGems",
        "description": "Package manager for Ruby programming language",
        "search_url_template": "https://rubygems.org/gems/{package}",
        "install_pattern": r"gem\s+install\s+(?:-\S+\s+)*([^\s-]\S*)",
    },
    "go": {
        "name": "Go Modules",
        "description": "Go programming language module system",
        "search_url_template": "https://pkg.go.dev/{package}",
        "install_pattern": r"go\s+install\s+(?:-\S+\s+)*([^\s@-][^\s@]*)",
    },
}

PROGRAMMING_TOOLS: dict[str, dict[str, str]] = {
    "python": {
        "name": "Python",
        "description": "High-level programming language for general-purpose programming",
    },
    "python3": {
        "name": "Python 3",
        "description": "Python 3.x interpreter for running Python scripts",
    },
    "flutter": {
        "name": "Flutter",
        "description": "Google's UI toolkit for building cross-platform applications",
    },
    "dart": {
        "name": "Dart",
        "description": (
            "Programming language optimized for building mobile, desktop, "
            "server, and web applications"
        ),
    },
}
