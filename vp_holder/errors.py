class HolderError(Exception):
    """Base class for every failure of the presentation flow."""

    stage = "unknown"

    def __str__(self):
        return f"[{self.stage}] {super().__str__()}"


class ConfigurationError(HolderError):
    stage = "config"


class ConfigurationMissing(ConfigurationError):

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"Missing required configuration: {', '.join(self.names)}")


class ConfigurationInvalid(ConfigurationError):

    def __init__(self, problems):
        self.problems = dict(problems)
        detail = "; ".join(f"{name}: {msg}" for name, msg in self.problems.items())
        super().__init__(f"Invalid configuration: {detail}")


class CredentialLoadError(HolderError):
    stage = "load_credential"

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load credential from {self.path}: {reason}")


class MalformedCredential(HolderError):
    stage = "build_claims"


class SigningError(HolderError):
    stage = "sign"


class TokenExchangeFailed(HolderError):
    stage = "token_exchange"

    def __init__(self, endpoint: str, status: int | None, body: str):
        self.endpoint = endpoint
        self.status = status
        self.body = body
        super().__init__(f"Token request to {endpoint} failed (status={status}): {body}")


class ResourceFetchFailed(HolderError):
    stage = "fetch_entities"

    def __init__(self, url: str, status: int | None, body: str):
        self.url = url
        self.status = status
        self.body = body
        super().__init__(f"Entity request to {url} failed (status={status}): {body}")
