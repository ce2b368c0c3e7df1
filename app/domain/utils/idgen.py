from ulid import ULID


def new_ulid(prefix: str | None = None) -> str:
    value = str(ULID()).lower()
    return f"{prefix}{value}" if prefix else value


def new_session_id() -> str:
    return new_ulid("se_")


def new_category_id() -> str:
    return new_ulid("cat_")


def new_theme_id() -> str:
    return new_ulid("th_")


def new_subscription_id() -> str:
    return new_ulid("sub_")


def new_cleanup_task_id() -> str:
    return new_ulid("mc_")
