# Константы для list_files / change_directory

# Глубина обхода по умолчанию
DEFAULT_MAX_DEPTH = 3

# Ограничения для glob-паттернов
MAX_PATTERN_LENGTH = 500

# Стандартные директории для игнорирования
DEFAULT_IGNORE_DIRECTORIES = {
    ".git", "node_modules", "dist", "build", "coverage", "__pycache__",
}

# Элементы отрисовки дерева
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

DIR_ICON = "📂"
FILE_ICON = "📄"
LINK_ICON = "🔗"
OTHER_ICON = "❔"
WARN_ICON = "⚠️"

MAX_DEPTH_MARKER = "... (max depth reached)"
DENIED_MARKER = "[Permission denied]"
INACCESSIBLE_MARKER = "[inaccessible]"

# Каталоги, в которые list_files не заходит ни при каком пути
DEFAULT_PROTECTED_DIRECTORIES = {
    ".git", ".ssh", ".gnupg", ".aws", ".azure", ".kube",
}

# Файлы с секретами (сравнение без учета регистра)
DEFAULT_PROTECTED_FILES = {
    ".env", ".env.local", ".env.production", ".env.development",
    "id_rsa", "id_rsa.pub", "id_ed25519", "id_ed25519.pub", "id_dsa",
    ".bash_history", ".zsh_history", ".node_repl_history",
    "passwd", "shadow", "sudoers",
    ".npmrc", ".pypirc", "credentials", "credentials.json",
    ".netrc", ".pgpass", ".my.cnf",
}
