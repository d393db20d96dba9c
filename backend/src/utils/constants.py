"""Shared constants for the workshop feedback backend."""

# Order matters: answers[i] is the answer to FEEDBACK_QUESTIONS[i].
FEEDBACK_QUESTIONS: tuple[str, ...] = (
    "How would you rate your overall interaction & experience with workshop?",
    "How would you rate the quality of maintenance & repair work done on your car?",
    "How would you rate the condition or cleanliness of your car on return?",
    "How would you rate the explanation given by service advisor on the work done of your car?",
    "How would you rate the Service Delivery process of your car after servicing?",
    "How would you rate the overall cleanliness of the Dealer Facility?",
    "Did you receive the car as per promised Date & Time?",
    "Were all the work reported by you completed?",
    "Were the repair charges reasonable with respect to the work done?",
    "Was the Pre Road Test conducted with you before opening the Repair Order?",
    "Did Service Advisor open your Repair Order in which device format?",
    "How do you rate the courtesy & behaviour of the person who came to pick & drop your vehicle?",
    "Was the vehicle picked & dropped as per committed time?",
    "Did the SA inform you about the Estimate of Repair & Cost?",
    "How would you rate the support provided by workshop in getting Insurance claim?",
    "How would you rate the quality of Bodyshop repair work done on your car?",
    "Did the Workshop provide you regular updates about your vehicle status on WhatsApp Group?",
    "Were you provided the Final Road Test during delivery of the Vehicle?",
)

NOT_ANSWERED = "Not Answered"

SUCCESS_MESSAGE = "Feedback saved and email sent successfully"
NOTIFICATION_FAILED_MESSAGE = "Feedback saved but email sending failed"
SAVE_FAILED_MESSAGE = "Failed to save feedback"

API_VERSION = "1.0.0"
