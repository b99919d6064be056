from django import dispatch

# Issued after the events of a conference have been rescaled because its
# timeslot duration changed. Arguments: old_duration, new_duration, count.
timeslots_rescaled = dispatch.Signal()

# Issued after `Person.set_role_state` has updated the presenter
# participations of a person in a conference. Arguments: conference, state,
# count.
role_state_changed = dispatch.Signal()
