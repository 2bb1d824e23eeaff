# Schemas package init
"""
RecipeBook Backend: Pydantic Schemas
=====================================

What:  Entity models, create inputs, patch inputs and response wrappers.
How:   One module per resource; `common` holds the error and health models
       shared by every router.

Patch inputs (`*Update`) declare every field Optional. A field the client
did not send is absent from `model_fields_set`; an explicit null is treated
the same way and never overwrites stored data.
"""
