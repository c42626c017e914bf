class KBlogWriterError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500
    message = "서버 오류가 발생했습니다. 잠시 후 다시 시도해주세요."

    def __init__(self, message: str | None = None, detail: str = "") -> None:
        self.message = message or self.message
        self.detail = detail
        super().__init__(detail or self.message)


class ValidationError(KBlogWriterError):
    status_code = 400
    message = "키워드를 입력해주세요."


class ConfigurationError(KBlogWriterError):
    status_code = 500
    message = "API 키가 설정되지 않았습니다. 관리자에게 문의하세요."


class ProviderAuthError(KBlogWriterError):
    status_code = 401
    message = "API 키가 유효하지 않습니다."


class ProviderQuotaError(KBlogWriterError):
    status_code = 429
    message = "API 사용 한도를 초과했습니다. 잠시 후 다시 시도해주세요."


class ProviderGenericError(KBlogWriterError):
    status_code = 500


class GenerationError(KBlogWriterError):
    status_code = 500
    message = "AI 응답을 생성하지 못했습니다. 다시 시도해주세요."


class ParseError(KBlogWriterError):
    status_code = 500
    message = "AI 응답 파싱에 실패했습니다. 다시 시도해주세요."


class EvidenceUnavailable(Exception):
    """Raised inside the evidence fetcher only; converted to a placeholder."""

    def __init__(self, reason: str, placeholder: str) -> None:
        self.reason = reason
        self.placeholder = placeholder
        super().__init__(reason)
