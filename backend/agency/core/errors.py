class StoreUnavailable(RuntimeError):
    """Nessuna connessione al DB configurata: solo le scritture falliscono."""

    def __init__(self, message: str = "Database non disponibile"):
        super().__init__(message)
        self.message = message


class NotFound(LookupError):
    def __init__(self, entity: str, ident):
        super().__init__(f"{entity} {ident} non trovato")
        self.entity = entity
        self.ident = ident
        self.message = f"{entity} non trovato"


class InvalidInput(ValueError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
