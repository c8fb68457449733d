"""Message catalogue for API error responses."""

TRANSLATIONS = {
    "en": {
        "errors.resource_not_found": "Resource not found",
        "errors.not_authenticated": "Could not validate credentials",
        "errors.permission_denied": "Not authorized",
        "errors.invalid_request": "Invalid request",
        "errors.resource_conflict": "Resource conflict",
        "errors.internal": "Internal server error",
        "tasks.not_found": "Task not found",
        "tasks.nothing_to_approve": "No pending status change to approve",
        "tasks.concurrent_update": "Task was modified by another request, reload and retry",
        "tasks.removed": "Task removed",
        "users.not_found": "User not found",
        "users.already_exists": "User with this email already exists",
        "users.active_tasks": (
            "Cannot delete account while having active tasks. "
            "Please complete or reassign your tasks first."
        ),
        "users.deleted": "Account deleted successfully",
        "auth.bad_credentials": "Incorrect email or password",
    },
    "ru": {
        "errors.resource_not_found": "Ресурс не найден",
        "errors.not_authenticated": "Не удалось проверить учетные данные",
        "errors.permission_denied": "Недостаточно прав",
        "errors.invalid_request": "Некорректный запрос",
        "errors.resource_conflict": "Конфликт ресурса",
        "errors.internal": "Внутренняя ошибка сервера",
        "tasks.not_found": "Задача не найдена",
        "tasks.nothing_to_approve": "Нет запроса на смену статуса",
        "tasks.concurrent_update": "Задача была изменена другим запросом, обновите и повторите",
        "tasks.removed": "Задача удалена",
        "users.not_found": "Пользователь не найден",
        "users.already_exists": "Пользователь с таким email уже существует",
        "users.active_tasks": (
            "Нельзя удалить аккаунт, пока есть незавершенные задачи. "
            "Завершите или переназначьте их."
        ),
        "users.deleted": "Аккаунт удален",
        "auth.bad_credentials": "Неверный email или пароль",
    },
}
