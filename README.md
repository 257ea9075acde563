# carechain

In-memory services for healthcare records. Each service is built on a small
ledger environment, `carechain.ledger.Env`, which supplies storage, a ledger
timestamp, generated addresses, authorization checks and a list of published
events.

## The environment

`carechain.ledger.Env(timestamp=0)` has:

- `storage` and `temporary`: two `Storage` key-value stores. `get(key, default)`,
  `set(key, value)`, `has(key)` and `remove(key)` work on them. Values are deep-copied
  when they go in and when they come out. A record you read back is therefore your own
  copy, and changing it does not change what is stored.
- `generate_address()`: returns a fresh `Address` that is unique within the
  environment, such as `addr-00000001`.
- `mock_all_auths()` and `require_auth(address)`: `require_auth` raises
  `AuthorizationError` until `mock_all_auths()` has been called. After that, every
  request is granted and the address is appended to `env.authorized`. There is no
  authorization for one address at a time.
- `timestamp` and `set_timestamp(timestamp)`: the ledger time. A negative value
  raises `ValueError`.
- `publish(topics, data)`: appends an `Event(topics, data)` to `env.events` and
  returns it.

## Services

Each service takes an `Env` when it is constructed.

### `carechain.care_plan.CarePlanContract`

Care plans, with goals, interventions, barriers, reviews and care teams. Ids are
counters that start at 1, one counter per kind of record.

- `create_care_plan` sets the next review date to
  `start_date + review_frequency_days * 86400`.
- `record_goal_progress` and `mark_goal_achieved` refuse goals that are already
  achieved or discontinued.
- `resolve_barrier` refuses a barrier that is already resolved.
- `conduct_care_plan_review` refuses a review that has already been conducted. It
  needs a 32-byte notes hash, and raises `ValueError` otherwise. It sets the plan's
  last review date to the current ledger time and moves the next review date forward
  by the review frequency. If `continue_plan` is false, it marks the plan
  `CarePlanStatus.COMPLETED`.
- `get_care_plan_summary` returns a `CarePlanSummary` holding:
  - the plan's open goals, leaving out achieved and discontinued ones;
  - its interventions;
  - its care team;
  - all of its barriers, resolved or not.

Each successful operation publishes an event, for example `("care_plan_created",)`.
Failures raise `CarePlanError`, whose `code` is an `ErrorCode`. The records and
statuses are defined in `carechain.care_plan_types`. Their typed storage access is in
`carechain.care_plan_store.CarePlanStore`.

### `carechain.clinical_guideline.ClinicalGuidelineContract`

- `register_clinical_guideline` stores the guideline's criteria hash under its id.
  Both hashes must be 32 bytes.
- `evaluate_guideline` reports `applicable=True` when the patient data hash equals the
  stored criteria hash. An unknown guideline raises `GuidelineError` with
  `GuidelineErrorCode.GUIDELINE_NOT_FOUND`.
- `calculate_drug_dosage` returns a fixed recommendation: `5mg/kg`, `QD`, `Oral`,
  10 days. It sets `renal_adjustment` when the renal function is below 60; a missing
  value counts as 100. A negative weight raises `ValueError`.
- `assess_risk_score` sums the inputs. It raises `OverflowError` if the running total
  leaves the 32-bit signed range.
- `suggest_care_pathway` returns the steps `Initial Assessment` and `Lab Tests`.
- `create_reminder` keeps the due date in temporary storage, keyed by patient. It
  returns the ledger timestamp as the reminder id.
- `check_preventive_care` returns the alerts that apply to the patient's age:
  - `Cardiac_Screening` above 45;
  - `Blood_Pressure_Check` above 18.

### `carechain.doctor_registry.DoctorRegistry`

Doctor profiles (`DoctorProfileData`), keyed by the doctor's wallet address.

- Creating a second profile for the same wallet raises `DoctorProfileExistsError`.
- Reading or updating a missing profile raises `DoctorProfileNotFoundError`.
- Updating replaces the specialization and metadata.

### `carechain.emergency_medical_info.EmergencyMedicalInfo`

- Emergency profiles. Advance directives, when given, are stored as a DNR order.
- Critical alerts.
- Break-glass access through `emergency_access_request`, which logs every access and
  returns the profile.
- Contact notification, which logs the notification and returns the profile's
  contacts.
- DNR orders. Recording one sets `dnr_status` on an existing profile.

A missing profile raises `EmergencyProfileNotFoundError`. Hashes must be 32 bytes.

### `carechain.financial_records.FinancialRecordContract`

Financial records, with a `RecordType` for each, stored per owner in the order they
were added and stamped with the ledger time.

- The owner can always read the records. Anyone else can read them only after
  `grant_access` and until `revoke_access`; otherwise `AccessDeniedError` is raised.
- Records can be filtered by type, or by a timestamp range whose ends are included.

## Example

```python
from carechain.ledger import Env
from carechain.care_plan import CarePlanContract

env = Env()
env.mock_all_auths()
provider = env.generate_address()
patient = env.generate_address()

plans = CarePlanContract(env)
plan_id = plans.create_care_plan(
    patient, provider, "chronic_disease",
    ["Type 2 Diabetes"], ["Reduce HbA1c"], 1_000_000, 30,
)
summary = plans.get_care_plan_summary(plan_id, provider)
print(summary.next_review_date)  # 3592000
```

## What it does not do

- All state lives in memory in an `Env` and is lost when the environment goes away.
  Nothing is saved to disk or shared between processes.
- There is no command-line tool, server or network interface. The services are used
  as a Python library.
- Authorization is all or nothing, as described above. No signatures are checked.

## Installing

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```