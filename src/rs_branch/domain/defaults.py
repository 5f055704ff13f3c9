"""System-wide default settings document.

Used by the legal-text snapshot whenever a branch leaves a field empty.
"""

from src.rs_branch.domain.models import BranchSettings

DEFAULT_BRANCH_SETTINGS = BranchSettings(
    company_name="JO-SERVICE",
    company_logo_url="https://placehold.co/150x50.png?text=Logo",
    company_cuit="XX-XXXXXXXX-X",
    company_address="Dirección Ejemplo 123, Ciudad",
    company_contact_details="Tel: (123) 456-7890\nEmail: contacto@joservice.com",
    warranty_conditions=(
        "CONDICIONES GENERALES DE GARANTÍA: El taller garantiza la reparación por noventa (90) "
        "días calendario (o el período especificado) a partir de la fecha de entrega, únicamente "
        "sobre la/s falla/s especificada/s en la presente orden y sobre el/los repuesto/s "
        "utilizado/s si los hubiere. La garantía podrá ser anulada si se detecta dolo o fraude "
        "por parte del cliente o terceros."
    ),
    pickup_conditions=(
        "CONDICIONES GENERALES DE RETIRO: El cliente deberá retirar el equipo dentro de los plazos "
        "establecidos. Consultar políticas de abandono. El equipo se entrega al portador del "
        "comprobante con datos coincidentes. Si lo retira un tercero, se requiere autorización "
        "escrita y copia del DNI del titular."
    ),
    unlock_disclaimer_text=(
        "IMPORTANTE (DESBLOQUEO): Si no se informa el patrón/clave de desbloqueo o si el informado "
        "es incorrecto, es imposible realizar un test de funcionalidad completo del equipo. El "
        "taller NO será responsable de los componentes no testeados. La garantía será únicamente "
        "por el repuesto utilizado si no se pueden verificar las funciones del equipo."
    ),
    abandonment_policy_text=(
        "POLÍTICA DE ABANDONO DE EQUIPO: Pasados los treinta (30) días de la notificación de "
        "equipo 'LISTO PARA RETIRAR' o 'PRESUPUESTADO', el valor de la reparación o presupuesto se "
        "actualizará según la inflación vigente. Pasados los sesenta (60) días corridos desde "
        "dicha notificación sin que el equipo sea retirado, se considerará en estado de abandono "
        "según Art. 2525 y 2526 CCCN, facultando al taller a disponer del mismo para cubrir "
        "gastos, sin derecho a reclamo por parte del cliente."
    ),
    data_loss_policy_text=(
        "PÉRDIDA DE INFORMACIÓN Y POLÍTICA DE PRIVACIDAD: El taller NO se responsabiliza por la "
        "pérdida total o parcial de información (contactos, fotos, videos, etc.) alojada en el "
        "equipo. Es responsabilidad del cliente realizar un backup previo. El cliente autoriza al "
        "taller a acceder a la información del dispositivo necesaria para realizar el "
        "diagnóstico y/o reparación."
    ),
    untested_device_policy_text=(
        "EQUIPOS SIN ENCENDER O CON CLAVE/PATRÓN NO INFORMADO: Estos equipos se entregan sin el "
        "testeo completo de funcionalidad. La garantía será sobre el repuesto o la falla "
        "informada. Para hacer efectiva la garantía en caso de reingreso, el cliente deberá "
        "informar el patrón o clave de desbloqueo."
    ),
    budget_variation_text=(
        "PRESUPUESTO: El presupuesto informado se basa en la falla declarada por el cliente y/o en "
        "la revisión inicial. Si durante la reparación se detectan fallas adicionales no "
        "contempladas, se informará al cliente un nuevo presupuesto."
    ),
    high_risk_device_text=(
        "TELÉFONOS CON RIESGOS ESPECIALES: Equipos mojados, sulfatados, con golpes fuertes, "
        "intervenidos previamente por terceros o con problemas de placa madre pueden presentar "
        "riesgos adicionales durante el desarme o reparación. El cliente acepta estos riesgos."
    ),
    partial_damage_display_text=(
        "PANTALLAS CON DAÑO PARCIAL: En equipos con pantallas parcialmente funcionales, la falla "
        "puede incrementarse o dejar de funcionar por completo durante el desarme. El taller no se "
        "responsabiliza por dicho agravamiento."
    ),
    warranty_void_conditions_text=(
        "ANULACIÓN DE GARANTÍA: La garantía quedará anulada por: excesos o picos de tensión "
        "eléctrica; ingreso de humedad o líquidos; intervención de terceros no autorizados; uso "
        "inadecuado o negligente; golpes, caídas o roturas posteriores a la reparación; uso de "
        "cargadores no originales o defectuosos; instalación de software no autorizado."
    ),
    privacy_policy_text=(
        "POLÍTICA DE PRIVACIDAD: Los datos personales y la información del dispositivo serán "
        "tratados con confidencialidad y solo para los fines del servicio."
    ),
    abandonment_risk_days=30,
    abandonment_final_days=60,
)


def with_defaults(settings: BranchSettings | None) -> BranchSettings:
    """Fill every blank field from DEFAULT_BRANCH_SETTINGS."""
    merged = DEFAULT_BRANCH_SETTINGS.to_dict()
    for name, value in (settings.to_dict() if settings else {}).items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        merged[name] = value
    return BranchSettings.from_dict(merged)
