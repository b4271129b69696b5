"""
Weboberfläche: Anmeldung, Projekte, Upload, Monatsarchiv, PDF-Export und Benutzerverwaltung.
Betrachter (viewer) dürfen nur ansehen; alles Schreibende und der Export sind Administratoren vorbehalten.
"""
from functools import wraps
from io import BytesIO
from typing import List, Optional

from flask import Flask, flash, redirect, render_template, request, send_file, session, url_for
from flask_login import LoginManager, UserMixin, current_user, login_required, login_user, logout_user
from loguru import logger

from month_archive.modules import AnalysisHistory, MonthArchive
from pydantic_models.data.analysis_result import AnalysisResult
from pydantic_models.data.saved_month import SavedMonth
from pydantic_models.data.user import User
from reports.modules import build_report_content, render_report_pdf, report_filename
from reports.modules.filters import FilterConfig, register_filters
from shared_modules.config import Config
from shared_modules.errors import FileKind, SpreadsheetError
from spreadsheet_analysis.modules import analyze_bytes
from user_management.modules import SeedUser, UserStore


class LoginUser(UserMixin):
    def __init__(self, user: User):
        self.user = user
        self.id = user.id

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin


def collect_seed_users(config: Config) -> List[SeedUser]:
    """Seed-Benutzer aus der Config; ohne Passwort in der Umgebung wird der Benutzer übersprungen."""
    seeds = []
    for entry in config.auth.seed_users:
        password = config.resolve_password(entry.password_env)
        if not password:
            logger.warning(
                f"Kein Passwort für Seed-Benutzer '{entry.username}' "
                f"({entry.password_env}_ENC oder {entry.password_env}) gesetzt, übersprungen."
            )
            continue
        seeds.append(SeedUser(username=entry.username, password=password, role=entry.role))
    return seeds


def create_app(config: Optional[Config] = None) -> Flask:
    config = config or Config()
    app = Flask(__name__)
    # Secret Key sicher aus Umgebungsvariable oder .env laden
    app.secret_key = config.get_secret("FLASK_SECRET_KEY", "unsicherer_fallback")
    app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024

    users = UserStore(config.db_path)
    archive = MonthArchive(config.db_path)
    history = AnalysisHistory(config.db_path, limit=config.database.history_limit)
    users.seed_default_users(collect_seed_users(config))

    register_filters(
        app.jinja_env,
        FilterConfig(
            locale=config.report.locale,
            timezone=config.report.timezone,
            numeric_format=config.report.numeric_format,
        ),
    )

    login_manager = LoginManager()
    login_manager.login_view = "login"
    login_manager.login_message = "Faça login para continuar."
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        user = users.get_user(user_id)
        return LoginUser(user) if user else None

    def admin_required(message: str):
        def decorator(view):
            @wraps(view)
            def wrapped(*args, **kwargs):
                if not current_user.is_admin:
                    logger.warning(f"Zugriff verweigert für {current_user.user.username}: {request.path}")
                    flash(message, "error")
                    project_id = kwargs.get("project_id")
                    if project_id:
                        return redirect(url_for("project", project_id=project_id))
                    return redirect(url_for("projects"))
                return view(*args, **kwargs)
            return wrapped
        return decorator

    def current_result(project_id: str) -> Optional[AnalysisResult]:
        raw = session.get(f"result:{project_id}")
        return AnalysisResult.from_json(raw) if raw else None

    def project_month(project_id: str, month_id: str) -> Optional[SavedMonth]:
        """Archivierter Monat, aber nur wenn er zu diesem Projekt gehört."""
        try:
            month = archive.get_month(month_id)
        except KeyError:
            return None
        if month.project_id != project_id:
            logger.warning(f"Monat {month_id} gehört zu {month.project_id}, nicht zu {project_id}.")
            return None
        return month

    @app.route("/", methods=["GET", "POST"])
    def login():
        if request.method == "POST":
            user = users.authenticate(request.form.get("username", ""), request.form.get("password", ""))
            if user:
                login_user(LoginUser(user))
                return redirect(url_for("projects"))
            return render_template("login.html", error="Usuário ou senha incorretos")
        return render_template("login.html")

    @app.route("/logout")
    @login_required
    def logout():
        logout_user()
        session.clear()
        return redirect(url_for("login"))

    @app.route("/projetos")
    @login_required
    def projects():
        return render_template("projects.html", projects=config.projects.projects)

    @app.route("/projeto/<project_id>")
    @login_required
    def project(project_id: str):
        return render_template(
            "project.html",
            project_id=project_id,
            project_name=config.projects.display_name(project_id),
            legends=config.projects.legends(project_id),
            result=current_result(project_id),
            viewing=None,
            saved_months=archive.list_months(project_id),
            default_month_name=archive.default_display_name(),
        )

    @app.route("/projeto/<project_id>/upload", methods=["POST"])
    @login_required
    @admin_required("Você não tem permissão para fazer upload de arquivos")
    def upload(project_id: str):
        file = request.files.get("file")
        if file is None or not file.filename:
            flash("Nenhum arquivo selecionado", "error")
            return redirect(url_for("project", project_id=project_id))
        try:
            kind = FileKind.from_upload(file.filename, file.mimetype)
            data = file.read()
            result = analyze_bytes(data, kind, project_id).with_period(
                request.form.get("start_date"), request.form.get("end_date")
            )
        except SpreadsheetError as e:
            logger.error(f"Upload {file.filename} fehlgeschlagen ({e.code}): {e}")
            flash(f"{e.message}. Tente novamente ou verifique o formato do arquivo.", "error")
            return redirect(url_for("project", project_id=project_id))

        history.save_analysis(result)
        session[f"result:{project_id}"] = result.to_json()
        flash("Planilha analisada com sucesso!", "success")
        return redirect(url_for("project", project_id=project_id))

    @app.route("/projeto/<project_id>/meses", methods=["POST"])
    @login_required
    @admin_required("Você não tem permissão para salvar meses")
    def save_month(project_id: str):
        result = current_result(project_id)
        if result is None:
            flash("Nenhum dado para salvar", "error")
            return redirect(url_for("project", project_id=project_id))
        try:
            archive.save_month(
                project_id,
                result,
                display_name=request.form.get("display_name", ""),
                start_date=request.form.get("start_date") or None,
                end_date=request.form.get("end_date") or None,
            )
        except ValueError as e:
            flash(str(e), "error")
            return redirect(url_for("project", project_id=project_id))
        flash(f"Mês \"{request.form['display_name'].strip()}\" salvo com sucesso!", "success")
        return redirect(url_for("project", project_id=project_id))

    @app.route("/projeto/<project_id>/meses/<month_id>")
    @login_required
    def view_month(project_id: str, month_id: str):
        month = project_month(project_id, month_id)
        if month is None:
            flash("Mês não encontrado", "error")
            return redirect(url_for("project", project_id=project_id))
        return render_template(
            "project.html",
            project_id=project_id,
            project_name=config.projects.display_name(project_id),
            legends=config.projects.legends(project_id),
            result=month.data,
            viewing=month,
            saved_months=archive.list_months(project_id),
            default_month_name=archive.default_display_name(),
        )

    @app.route("/projeto/<project_id>/meses/<month_id>/excluir", methods=["POST"])
    @login_required
    @admin_required("Você não tem permissão para excluir meses")
    def delete_month(project_id: str, month_id: str):
        if project_month(project_id, month_id) is not None and archive.delete_month(month_id):
            flash("Mês excluído com sucesso!", "success")
        else:
            flash("Mês não encontrado", "error")
        return redirect(url_for("project", project_id=project_id))

    @app.route("/projeto/<project_id>/relatorio")
    @login_required
    @admin_required("Você não tem permissão para exportar PDF")
    def export_pdf(project_id: str):
        month_id = request.args.get("mes")
        month_label = None
        if month_id:
            month = project_month(project_id, month_id)
            if month is None:
                flash("Mês não encontrado", "error")
                return redirect(url_for("project", project_id=project_id))
            result, month_label = month.data, month.display_name
        else:
            result = current_result(project_id)
        if result is None:
            flash("Nenhum dado para exportar", "error")
            return redirect(url_for("project", project_id=project_id))

        content = build_report_content(
            result,
            project_id,
            config.projects.display_name(project_id),
            legends=config.projects.legends(project_id),
            month_label=month_label,
            config=config.report,
        )
        pdf = render_report_pdf(content)
        return send_file(
            BytesIO(pdf),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=report_filename(project_id, month_label),
        )

    @app.route("/painel", methods=["GET", "POST"])
    @login_required
    @admin_required("Apenas administradores podem acessar o painel")
    def control_panel():
        if request.method == "POST":
            try:
                users.create_user(
                    request.form.get("username", ""),
                    request.form.get("password", ""),
                    request.form.get("role", "viewer"),
                )
                flash("Usuário criado com sucesso", "success")
            except ValueError as e:
                flash(str(e), "error")
            return redirect(url_for("control_panel"))
        return render_template("control_panel.html", users=users.list_users())

    @app.route("/painel/<user_id>/excluir", methods=["POST"])
    @login_required
    @admin_required("Apenas administradores podem acessar o painel")
    def delete_user(user_id: str):
        try:
            users.delete_user(user_id, acting_user_id=current_user.id)
            flash("Usuário deletado com sucesso", "success")
        except PermissionError as e:
            flash(str(e), "error")
        except KeyError:
            flash("Usuário não encontrado", "error")
        return redirect(url_for("control_panel"))

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
