# Hilfsskript zum Verschlüsseln der Seed-Passwörter für .env
# Ausführen: python src/utils/encrypt_secret.py <PASSWORD_ENV> [<klartext-passwort>]
# Ergebnis: Zeile <PASSWORD_ENV>_ENC=... für die .env (siehe auth.seed_users in der Config)
import sys
from typing import List, Optional

from cryptography.fernet import Fernet  # type: ignore[import]

from shared_modules.config import Config


def encrypt_secret(password: str, fernet_key: str) -> str:
    return Fernet(fernet_key.encode()).encrypt(password.encode()).decode()


def env_line(password_env: str, password: str, fernet_key: str) -> str:
    return f"{password_env}_ENC={encrypt_secret(password, fernet_key)}"


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Aufruf: encrypt_secret.py <PASSWORD_ENV> [<klartext-passwort>]")
        return 1
    password_env = args[0]
    if len(args) >= 2:
        password = args[1]
    else:
        # Interaktive Abfrage, falls kein Passwort übergeben wurde (z. B. VSCode Run/Debug)
        import getpass
        password = getpass.getpass(f"Passwort für {password_env} (wird nicht angezeigt): ")
        if not password:
            print("Kein Passwort eingegeben. Abbruch.")
            return 1

    fernet_key = Config().get_secret("FERNET_KEY")
    if not fernet_key:
        print("Kein FERNET_KEY in der Umgebung/.env gefunden. Neuer Schlüssel:")
        print(f"FERNET_KEY={Fernet.generate_key().decode()}")
        print("Bitte eintragen und das Skript erneut ausführen.")
        return 1

    print(env_line(password_env, password, fernet_key))
    return 0


if __name__ == "__main__":
    sys.exit(main())
