from freeproduct.core.constants import SimpleAction
from freeproduct.dto.rules import ActionForm, Fieldset, FormField

ACTION_FIELDSET = "action_fieldset"


def build_action_form() -> ActionForm:
    """Actions tab as the rule editor ships it, before extensions."""
    fieldset = Fieldset(id=ACTION_FIELDSET, legend="Update prices using the following information")
    fieldset.add_field(FormField(name="simple_action", type="select", label="Apply", title="Apply", values=list(SimpleAction.STANDARD_OPTIONS)))
    fieldset.add_field(FormField(name="discount_amount", type="text", label="Discount Amount", title="Discount Amount"))
    fieldset.add_field(FormField(name="discount_qty", type="text", label="Maximum Qty Discount is Applied To"))
    fieldset.add_field(FormField(name="discount_step", type="text", label="Discount Qty Step (Buy X)"))
    fieldset.add_field(FormField(
        name="stop_rules_processing", type="select", label="Stop Further Rules Processing",
        values=[{"value": "1", "label": "Yes"}, {"value": "0", "label": "No"}],
    ))
    return ActionForm(fieldsets=[fieldset])


class ActionFormExtender:
    """Adds the 'Add a Gift' action and its SKU field to the rule form"""

    def extend(self, form: ActionForm) -> ActionForm:
        simple_action = form.get_field("simple_action")
        if simple_action and not any(o.get("value") == SimpleAction.ADD_GIFT for o in simple_action.values):
            simple_action.values.append({"value": SimpleAction.ADD_GIFT, "label": "Add a Gift"})

        fieldset = form.get_fieldset(ACTION_FIELDSET)
        if fieldset and form.get_field("gift_sku") is None:
            fieldset.add_field(FormField(
                name="gift_sku",
                type="text",
                label="Gift SKU",
                title="Gift SKU",
                note="Enter the SKU of the gift that should be added to the cart",
                depends={"simple_action": SimpleAction.ADD_GIFT},
            ))
        return form
