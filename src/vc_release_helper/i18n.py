"""
Translations for terminal output.

The active :class:`Language` is resolved once by the CLI (configured
value first, then the system locale) and passed explicitly to every
formatting call. The analysis modules never see it: they return reason
codes which :func:`describe_reason` turns into text here.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Dict, List, Mapping, Optional

from vc_release_helper.analysis.change_classifier import BumpLevel, Reason, ReasonCode


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class Language(str, Enum):
    EN = "en"
    PT = "pt"
    ES = "es"
    FR = "fr"


DEFAULT_LANGUAGE = Language.EN

LOCALE_ENV_VARS = ("LANG", "LANGUAGE", "LC_ALL")


TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        # version-control
        "version_control": "Version Control System",
        "current_version": "Current version:",
        "analyzing_commit": "Analyzing last commit...",
        "commit_message": "Commit message:",
        "files_modified": "Files modified:",
        "and_more_files": "... and {count} more file(s)",
        "change_analysis": "Change analysis:",
        "suggested_type": "Suggested type:",
        "new_version": "New version:",
        "update_version": "Update version? (y/n):",
        "version_not_changed": "Version not changed.",
        "confirm_version_type": "Confirm version type:",
        "major_desc": "Breaking changes",
        "minor_desc": "New feature",
        "patch_desc": "Bug fix",
        "choose": "Choose (1/2/3) [default: {default}]:",
        "invalid_option": "Invalid option. Enter 1, 2, or 3",
        "please_enter_yes_no": "Please enter 'y' or 'n'",
        "invalid_response": "Invalid response. Enter 'y' for yes or 'n' for no",
        "updating_files": "Updating files...",
        "version_updated_to": "Version updated to {version}!",
        "no_commit_found": "No commit found. Make a commit first.",
        "version_read_failed": "Could not read the current version:",
        # analysis reasons
        "reason_breaking_change": "🔴 Commit indicates BREAKING change or functionality removal",
        "reason_config_modified": "🟡 Configuration files modified",
        "reason_new_feature": "🟡 Commit indicates new feature",
        "reason_new_files": "🟡 {count} new file(s) added",
        "reason_bug_fix": "🟢 Commit indicates bug fix",
        "reason_small_change": "🟢 Small change/adjustment",
        # updater
        "package_json_updated": "package.json updated",
        "file_updated": "{name} updated",
        "changelog_not_found": "CHANGELOG.md not found",
        "no_new_commits": "No new commits found",
        "changelog_updated": "CHANGELOG.md updated with {count} commit(s)",
        "initial_release": "Initial Release",
        "first_public_version": "First public release of the project.",
        # git publish sequence
        "executing_git_commands": "Executing git commands...",
        "step_add": "Files added",
        "step_commit": "Commit created",
        "step_tag": "Tag created",
        "step_push": "Push completed",
        "step_push_tags": "Tags pushed",
        "version_published": "Version {version} published successfully!",
        "error_executing_git": "Error executing git commands:",
        "execute_manually": "Execute manually:",
        # smart-commit
        "smart_commit": "Smart Commit - Auto Message",
        "no_staged_files": "No staged files found.",
        "how_to_use": "How to use:",
        "make_changes": "Make your changes",
        "stage_files": "Stage files:",
        "run_command": "Run:",
        "staged_files": "Staged files:",
        "analyzing_changes": "Analyzing changes...",
        "generated_message": "Generated commit message:",
        "details": "Details:",
        "type": "Type:",
        "scope": "Scope:",
        "description": "Description:",
        "options": "Options:",
        "option_commit": "Commit",
        "option_edit": "Edit",
        "option_cancel": "Cancel",
        "default_label": "default",
        "choice": "Choice:",
        "invalid_enter": "Invalid. Enter 1, 2, or 3",
        "enter_commit_message": "Enter your commit message:",
        "empty_message": "Empty message. Commit cancelled.",
        "commit_cancelled": "Commit cancelled.",
        "committing": "Committing...",
        "commit_success": "Commit created successfully!",
        "commit_failed": "Failed to create commit",
        # language configuration
        "to_change_language": "To change language:",
        "language_set": "Language set to",
        "language_cleared": "Language configuration cleared. Using system default.",
        "current_language_is": "Current language:",
        "configured_manually": "manually configured",
        "detected_from_system": "detected from system",
        "available_languages": "Available languages: en, pt, es, fr",
        "config_error": "Configuration error:",
        # answers
        "yes_options": "y,yes",
        "no_options": "n,no",
    },
    Language.PT: {
        "version_control": "Sistema de Controle de Versão",
        "current_version": "Versão atual:",
        "analyzing_commit": "Analisando último commit...",
        "commit_message": "Mensagem do commit:",
        "files_modified": "Arquivos modificados:",
        "and_more_files": "... e mais {count} arquivo(s)",
        "change_analysis": "Análise da mudança:",
        "suggested_type": "Tipo sugerido:",
        "new_version": "Nova versão:",
        "update_version": "Deseja atualizar a versão? (s/n):",
        "version_not_changed": "Versão não alterada.",
        "confirm_version_type": "Confirme o tipo de versão:",
        "major_desc": "Breaking changes",
        "minor_desc": "Nova funcionalidade",
        "patch_desc": "Correção de bug",
        "choose": "Escolha (1/2/3) [padrão: {default}]:",
        "invalid_option": "Opção inválida. Digite 1, 2 ou 3",
        "please_enter_yes_no": "Por favor, digite 's' ou 'n'",
        "invalid_response": "Resposta inválida. Digite 's' para sim ou 'n' para não",
        "updating_files": "Atualizando arquivos...",
        "version_updated_to": "Versão atualizada para {version}!",
        "no_commit_found": "Nenhum commit encontrado. Faça um commit primeiro.",
        "version_read_failed": "Não foi possível ler a versão atual:",
        "reason_breaking_change": "🔴 Commit indica mudança BREAKING ou remoção de funcionalidade",
        "reason_config_modified": "🟡 Arquivos de configuração modificados",
        "reason_new_feature": "🟡 Commit indica nova funcionalidade",
        "reason_new_files": "🟡 {count} arquivo(s) novo(s) adicionado(s)",
        "reason_bug_fix": "🟢 Commit indica correção de bug",
        "reason_small_change": "🟢 Pequena mudança/ajuste",
        "package_json_updated": "package.json atualizado",
        "file_updated": "{name} atualizado",
        "changelog_not_found": "CHANGELOG.md não encontrado",
        "no_new_commits": "Nenhum commit novo encontrado",
        "changelog_updated": "CHANGELOG.md atualizado com {count} commit(s)",
        "initial_release": "Lançamento Inicial",
        "first_public_version": "Primeira versão pública do projeto.",
        "executing_git_commands": "Executando comandos git...",
        "step_add": "Arquivos adicionados",
        "step_commit": "Commit criado",
        "step_tag": "Tag criada",
        "step_push": "Push realizado",
        "step_push_tags": "Tags enviadas",
        "version_published": "Versão {version} publicada com sucesso!",
        "error_executing_git": "Erro ao executar comandos git:",
        "execute_manually": "Execute manualmente:",
        "smart_commit": "Smart Commit - Mensagem Automática",
        "no_staged_files": "Nenhum arquivo em stage encontrado.",
        "how_to_use": "Como usar:",
        "make_changes": "Faça suas alterações",
        "stage_files": "Adicione ao stage:",
        "run_command": "Execute:",
        "staged_files": "Arquivos em stage:",
        "analyzing_changes": "Analisando mudanças...",
        "generated_message": "Mensagem de commit gerada:",
        "details": "Detalhes:",
        "type": "Tipo:",
        "scope": "Escopo:",
        "description": "Descrição:",
        "options": "Opções:",
        "option_commit": "Commitar",
        "option_edit": "Editar",
        "option_cancel": "Cancelar",
        "default_label": "padrão",
        "choice": "Escolha:",
        "invalid_enter": "Inválido. Digite 1, 2 ou 3",
        "enter_commit_message": "Digite sua mensagem de commit:",
        "empty_message": "Mensagem vazia. Commit cancelado.",
        "commit_cancelled": "Commit cancelado.",
        "committing": "Commitando...",
        "commit_success": "Commit criado com sucesso!",
        "commit_failed": "Falha ao criar commit",
        "to_change_language": "Para mudar o idioma:",
        "language_set": "Idioma configurado para",
        "language_cleared": "Configuração de idioma removida. Usando padrão do sistema.",
        "current_language_is": "Idioma atual:",
        "configured_manually": "configurado manualmente",
        "detected_from_system": "detectado do sistema",
        "available_languages": "Idiomas disponíveis: en, pt, es, fr",
        "config_error": "Erro de configuração:",
        "yes_options": "s,sim",
        "no_options": "n,não,nao",
    },
    Language.ES: {
        "version_control": "Sistema de Control de Versiones",
        "current_version": "Versión actual:",
        "analyzing_commit": "Analizando último commit...",
        "commit_message": "Mensaje del commit:",
        "files_modified": "Archivos modificados:",
        "and_more_files": "... y {count} archivo(s) más",
        "change_analysis": "Análisis del cambio:",
        "suggested_type": "Tipo sugerido:",
        "new_version": "Nueva versión:",
        "update_version": "¿Actualizar versión? (s/n):",
        "version_not_changed": "Versión no cambiada.",
        "confirm_version_type": "Confirme el tipo de versión:",
        "major_desc": "Cambios incompatibles",
        "minor_desc": "Nueva funcionalidad",
        "patch_desc": "Corrección de errores",
        "choose": "Elija (1/2/3) [predeterminado: {default}]:",
        "invalid_option": "Opción inválida. Ingrese 1, 2 o 3",
        "please_enter_yes_no": "Por favor, ingrese 's' o 'n'",
        "invalid_response": "Respuesta inválida. Ingrese 's' para sí o 'n' para no",
        "updating_files": "Actualizando archivos...",
        "version_updated_to": "¡Versión actualizada a {version}!",
        "no_commit_found": "No se encontró commit. Haga un commit primero.",
        "version_read_failed": "No se pudo leer la versión actual:",
        "reason_breaking_change": "🔴 Commit indica cambio BREAKING o eliminación de funcionalidad",
        "reason_config_modified": "🟡 Archivos de configuración modificados",
        "reason_new_feature": "🟡 Commit indica nueva funcionalidad",
        "reason_new_files": "🟡 {count} archivo(s) nuevo(s) agregado(s)",
        "reason_bug_fix": "🟢 Commit indica corrección de error",
        "reason_small_change": "🟢 Pequeño cambio/ajuste",
        "package_json_updated": "package.json actualizado",
        "file_updated": "{name} actualizado",
        "changelog_not_found": "CHANGELOG.md no encontrado",
        "no_new_commits": "No se encontraron commits nuevos",
        "changelog_updated": "CHANGELOG.md actualizado con {count} commit(s)",
        "initial_release": "Lanzamiento Inicial",
        "first_public_version": "Primera versión pública del proyecto.",
        "executing_git_commands": "Ejecutando comandos git...",
        "step_add": "Archivos agregados",
        "step_commit": "Commit creado",
        "step_tag": "Tag creado",
        "step_push": "Push completado",
        "step_push_tags": "Tags enviados",
        "version_published": "¡Versión {version} publicada con éxito!",
        "error_executing_git": "Error al ejecutar comandos git:",
        "execute_manually": "Ejecute manualmente:",
        "smart_commit": "Smart Commit - Mensaje Automático",
        "no_staged_files": "No se encontraron archivos en stage.",
        "how_to_use": "Cómo usar:",
        "make_changes": "Haga sus cambios",
        "stage_files": "Agregue al stage:",
        "run_command": "Ejecute:",
        "staged_files": "Archivos en stage:",
        "analyzing_changes": "Analizando cambios...",
        "generated_message": "Mensaje de commit generado:",
        "details": "Detalles:",
        "type": "Tipo:",
        "scope": "Alcance:",
        "description": "Descripción:",
        "options": "Opciones:",
        "option_commit": "Commitear",
        "option_edit": "Editar",
        "option_cancel": "Cancelar",
        "default_label": "predeterminado",
        "choice": "Opción:",
        "invalid_enter": "Inválido. Ingrese 1, 2 o 3",
        "enter_commit_message": "Ingrese su mensaje de commit:",
        "empty_message": "Mensaje vacío. Commit cancelado.",
        "commit_cancelled": "Commit cancelado.",
        "committing": "Commiteando...",
        "commit_success": "¡Commit creado con éxito!",
        "commit_failed": "Error al crear commit",
        "to_change_language": "Para cambiar el idioma:",
        "language_set": "Idioma configurado a",
        "language_cleared": "Configuración de idioma eliminada. Usando predeterminado del sistema.",
        "current_language_is": "Idioma actual:",
        "configured_manually": "configurado manualmente",
        "detected_from_system": "detectado del sistema",
        "available_languages": "Idiomas disponibles: en, pt, es, fr",
        "config_error": "Error de configuración:",
        "yes_options": "s,si,sí",
        "no_options": "n,no",
    },
    Language.FR: {
        "version_control": "Système de Contrôle de Version",
        "current_version": "Version actuelle:",
        "analyzing_commit": "Analyse du dernier commit...",
        "commit_message": "Message du commit:",
        "files_modified": "Fichiers modifiés:",
        "and_more_files": "... et {count} fichier(s) de plus",
        "change_analysis": "Analyse du changement:",
        "suggested_type": "Type suggéré:",
        "new_version": "Nouvelle version:",
        "update_version": "Mettre à jour la version? (o/n):",
        "version_not_changed": "Version non modifiée.",
        "confirm_version_type": "Confirmez le type de version:",
        "major_desc": "Changements incompatibles",
        "minor_desc": "Nouvelle fonctionnalité",
        "patch_desc": "Correction de bug",
        "choose": "Choisissez (1/2/3) [par défaut: {default}]:",
        "invalid_option": "Option invalide. Entrez 1, 2 ou 3",
        "please_enter_yes_no": "Veuillez entrer 'o' ou 'n'",
        "invalid_response": "Réponse invalide. Entrez 'o' pour oui ou 'n' pour non",
        "updating_files": "Mise à jour des fichiers...",
        "version_updated_to": "Version mise à jour vers {version}!",
        "no_commit_found": "Aucun commit trouvé. Faites un commit d'abord.",
        "version_read_failed": "Impossible de lire la version actuelle:",
        "reason_breaking_change": "🔴 Commit indique un changement BREAKING ou suppression de fonctionnalité",
        "reason_config_modified": "🟡 Fichiers de configuration modifiés",
        "reason_new_feature": "🟡 Commit indique une nouvelle fonctionnalité",
        "reason_new_files": "🟡 {count} nouveau(x) fichier(s) ajouté(s)",
        "reason_bug_fix": "🟢 Commit indique une correction de bug",
        "reason_small_change": "🟢 Petit changement/ajustement",
        "package_json_updated": "package.json mis à jour",
        "file_updated": "{name} mis à jour",
        "changelog_not_found": "CHANGELOG.md non trouvé",
        "no_new_commits": "Aucun nouveau commit trouvé",
        "changelog_updated": "CHANGELOG.md mis à jour avec {count} commit(s)",
        "initial_release": "Version Initiale",
        "first_public_version": "Première version publique du projet.",
        "executing_git_commands": "Exécution des commandes git...",
        "step_add": "Fichiers ajoutés",
        "step_commit": "Commit créé",
        "step_tag": "Tag créé",
        "step_push": "Push effectué",
        "step_push_tags": "Tags envoyés",
        "version_published": "Version {version} publiée avec succès!",
        "error_executing_git": "Erreur lors de l'exécution des commandes git:",
        "execute_manually": "Exécutez manuellement:",
        "smart_commit": "Smart Commit - Message Automatique",
        "no_staged_files": "Aucun fichier stagé trouvé.",
        "how_to_use": "Comment utiliser:",
        "make_changes": "Faites vos modifications",
        "stage_files": "Stagez les fichiers:",
        "run_command": "Exécutez:",
        "staged_files": "Fichiers stagés:",
        "analyzing_changes": "Analyse des changements...",
        "generated_message": "Message de commit généré:",
        "details": "Détails:",
        "type": "Type:",
        "scope": "Portée:",
        "description": "Description:",
        "options": "Options:",
        "option_commit": "Committer",
        "option_edit": "Éditer",
        "option_cancel": "Annuler",
        "default_label": "par défaut",
        "choice": "Choix:",
        "invalid_enter": "Invalide. Entrez 1, 2 ou 3",
        "enter_commit_message": "Entrez votre message de commit:",
        "empty_message": "Message vide. Commit annulé.",
        "commit_cancelled": "Commit annulé.",
        "committing": "Commit en cours...",
        "commit_success": "Commit créé avec succès!",
        "commit_failed": "Échec de la création du commit",
        "to_change_language": "Pour changer la langue:",
        "language_set": "Langue configurée à",
        "language_cleared": "Configuration de langue supprimée. Utilisation du système par défaut.",
        "current_language_is": "Langue actuelle:",
        "configured_manually": "configurée manuellement",
        "detected_from_system": "détectée du système",
        "available_languages": "Langues disponibles: en, pt, es, fr",
        "config_error": "Erreur de configuration:",
        "yes_options": "o,oui",
        "no_options": "n,non",
    },
}

REASON_KEYS = {
    ReasonCode.BREAKING_CHANGE: "reason_breaking_change",
    ReasonCode.CONFIG_MODIFIED: "reason_config_modified",
    ReasonCode.NEW_FEATURE: "reason_new_feature",
    ReasonCode.NEW_FILES: "reason_new_files",
    ReasonCode.BUG_FIX: "reason_bug_fix",
    ReasonCode.SMALL_CHANGE: "reason_small_change",
}

BUMP_EMOJIS = {
    BumpLevel.MAJOR: "🔴",
    BumpLevel.MINOR: "🟡",
    BumpLevel.PATCH: "🟢",
}


def detect_language(environ: Optional[Mapping[str, str]] = None) -> Language:
    """Detect the language from the locale environment variables.

    The first non-empty of ``LANG``, ``LANGUAGE`` and ``LC_ALL`` is used;
    anything other than Portuguese, Spanish or French falls back to
    English.
    """
    env = os.environ if environ is None else environ
    value = next((env[name] for name in LOCALE_ENV_VARS if env.get(name)), "")
    code = value.lower()[:2]
    if code in (Language.PT.value, Language.ES.value, Language.FR.value):
        return Language(code)
    return DEFAULT_LANGUAGE


def resolve_language(
    configured: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Language:
    """Return the configured language when valid, else the detected one."""
    if configured:
        try:
            return Language(configured)
        except ValueError:
            logger.warning("Ignoring unsupported configured language: %s", configured)
    return detect_language(environ)


def translate(key: str, language: Language = DEFAULT_LANGUAGE, **kwargs: object) -> str:
    """Look up ``key`` for ``language`` and format it with ``kwargs``.

    Missing keys fall back to English, and finally to the key itself.
    """
    table = TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])
    text = table.get(key)
    if text is None:
        text = TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)
    return text.format(**kwargs) if kwargs else text


def describe_reason(reason: Reason, language: Language = DEFAULT_LANGUAGE) -> str:
    return translate(REASON_KEYS[reason.code], language, count=reason.count or 0)


def yes_answers(language: Language) -> List[str]:
    return translate("yes_options", language).split(",")


def no_answers(language: Language) -> List[str]:
    return translate("no_options", language).split(",")
