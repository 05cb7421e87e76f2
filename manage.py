#!/usr/bin/env python3
"""
=============================================================================
EXPEDIENTES API - UNIFIED COMMANDER
=============================================================================
The single entry point for developer and operator tasks.

Usage:
    python manage.py init-db                   # Create database tables
    python manage.py create-user admin -r admin --nombre "Administrador"
    python manage.py seed-tipos                # Insert the default case-file types
    python manage.py serve --port 8000         # Run the API with uvicorn
"""

import argparse
import getpass
import sys
from typing import List, Optional

# Default catalogue loaded by `seed-tipos`: (codigo, nombre, descripcion)
DEFAULT_TIPOS = [
    ("ADM", "Administrativo", "Procedimientos administrativos generales"),
    ("CON", "Contratación", "Expedientes de contratación pública"),
    ("LIC", "Licencia", "Solicitudes de licencias y permisos"),
    ("REC", "Recurso", "Recursos y reclamaciones"),
    ("SUB", "Subvención", "Convocatorias y concesión de subvenciones"),
]


# Colors for terminal output
class Colors:
    HEADER = '\033[95m'
    GREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'


def log(msg, color=Colors.ENDC):
    print(f"{color}{msg}{Colors.ENDC}")


# --- COMMANDS ---

def cmd_init_db(args) -> int:
    from expedientes_api.db.session import create_schema, engine

    log(f"\n🗄️  Creating schema on {engine.url.render_as_string(hide_password=True)}", Colors.HEADER)
    create_schema()
    log("   ✅ Tables ready.", Colors.GREEN)
    return 0


def cmd_create_user(args) -> int:
    from expedientes_api.db.models import RolUsuario
    from expedientes_api.db.session import create_schema, db_session
    from expedientes_api.repositories import UsuariosRepository
    from expedientes_api.services import AuthServiceImpl

    password = args.password or getpass.getpass("Password: ")
    if not password:
        log("   ❌ Password must not be empty.", Colors.FAIL)
        return 1

    create_schema()
    with db_session() as db:
        repo = UsuariosRepository(db)
        if repo.find_by_username(args.username) is not None:
            log(f"   ❌ User '{args.username}' already exists.", Colors.FAIL)
            return 1

        AuthServiceImpl(repo).register_user(
            username=args.username,
            password=password,
            nombre_completo=args.nombre or args.username,
            rol=RolUsuario(args.rol),
            email=args.email,
        )

    log(f"   ✅ User '{args.username}' created with role '{args.rol}'.", Colors.GREEN)
    return 0


def cmd_seed_tipos(args) -> int:
    from expedientes_api.db.models import TipoExpediente
    from expedientes_api.db.session import create_schema, db_session
    from expedientes_api.repositories import TiposExpedienteRepository

    create_schema()
    created = 0
    with db_session() as db:
        repo = TiposExpedienteRepository(db)
        for codigo, nombre, descripcion in DEFAULT_TIPOS:
            if repo.find_by_codigo(codigo) is not None:
                log(f"   ⏭️  {codigo} already present", Colors.WARNING)
                continue
            repo.save(TipoExpediente(codigo=codigo, nombre=nombre, descripcion=descripcion))
            created += 1

    log(f"   ✅ {created} tipo(s) de expediente inserted.", Colors.GREEN)
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run(
        "expedientes_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    from expedientes_api.db.models import RolUsuario

    parser = argparse.ArgumentParser(description="Expedientes API management commands")
    sub = parser.add_subparsers(dest="command", required=True)

    p_init = sub.add_parser("init-db", help="Create database tables")
    p_init.set_defaults(func=cmd_init_db)

    p_user = sub.add_parser("create-user", help="Create a login user")
    p_user.add_argument("username")
    p_user.add_argument("-p", "--password", help="Password (prompted if omitted)")
    p_user.add_argument(
        "-r",
        "--rol",
        choices=[r.value for r in RolUsuario],
        default=RolUsuario.CONSULTA.value,
    )
    p_user.add_argument("--nombre", help="Full name (defaults to the username)")
    p_user.add_argument("--email")
    p_user.set_defaults(func=cmd_create_user)

    p_seed = sub.add_parser("seed-tipos", help="Insert the default case-file types")
    p_seed.set_defaults(func=cmd_seed_tipos)

    p_serve = sub.add_parser("serve", help="Run the API with uvicorn")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
